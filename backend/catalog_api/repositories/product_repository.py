"""
Catalog API — Product Repository (Storage Gateway)
====================================================

What:  Thin data-access adapter around an AsyncSession for the Product table.
Why:   Keeps SQLAlchemy out of the resource handler; the handler only sees
       six coroutine methods keyed by id.
How:   Every write commits on its own, so each call is atomic at the store
       level and nothing is composed across calls.
Who:   Constructed per request by `get_product_repository`; called by ProductService.

Operations:
    find_many(skip, take) → list[Product]   ordered by id
    count()               → int
    find_unique(id)       → Product | None
    create(fields)        → Product         raises on constraint violation
    update(id, fields)    → Product         raises NotFoundError if id is unknown
    delete(id)            → Product         raises NotFoundError if id is unknown

Store exceptions (sqlalchemy.exc.SQLAlchemyError and driver errors) are not
caught here; translating them is the handler's job.
"""

import logging
from typing import Any, List, Mapping, Optional

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.database import get_db_session
from catalog_api.exceptions import NotFoundError
from catalog_api.models.product import Product

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = ("name", "category", "price")


class ProductRepository:
    """Storage Gateway for Product records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_many(self, skip: int, take: int) -> List[Product]:
        query = select(Product).order_by(Product.id).offset(skip).limit(take)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(Product.id)))
        return result.scalar() or 0

    async def find_unique(self, product_id: int) -> Optional[Product]:
        return await self.session.get(Product, product_id)

    async def create(self, fields: Mapping[str, Any]) -> Product:
        product = Product(**_writable(fields))
        self.session.add(product)
        await self.session.commit()
        logger.debug("Inserted product %s", product.id)
        return product

    async def update(self, product_id: int, fields: Mapping[str, Any]) -> Product:
        product = await self._get_or_raise(product_id)
        for key, value in _writable(fields).items():
            setattr(product, key, value)
        await self.session.commit()
        return product

    async def delete(self, product_id: int) -> Product:
        product = await self._get_or_raise(product_id)
        await self.session.delete(product)
        await self.session.commit()
        return product

    async def _get_or_raise(self, product_id: int) -> Product:
        product = await self.session.get(Product, product_id)
        if product is None:
            raise NotFoundError(resource="product", resource_id=product_id)
        return product


def _writable(fields: Mapping[str, Any]) -> dict:
    # id is store-assigned and immutable
    return {key: value for key, value in fields.items() if key in WRITABLE_FIELDS}


async def get_product_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ProductRepository:
    """FastAPI dependency: a repository bound to this request's session."""
    return ProductRepository(db)
