"""
Catalog API — Product Service (Resource Handler)
==================================================

What:  The five operations of the product resource: list, get, create,
       update, delete.
Why:   Keeps pagination arithmetic, validation and error translation out
       of the route functions.
How:   Each method receives the Storage Gateway for the current request,
       validates input, calls the gateway once or twice, and returns
       response models. No state survives between calls.
Who:   Called by routes/products.py.

Error Translation:
    ┌──────────────┬──────────────────────┬──────────────────────────┐
    │ Operation    │ Missing id           │ Any other store failure  │
    ├──────────────┼──────────────────────┼──────────────────────────┤
    │ list         │ n/a                  │ DatabaseError (500)      │
    │ get          │ NotFoundError (404)  │ DatabaseError (500)      │
    │ create       │ n/a                  │ OperationFailedError 400 │
    │ update       │ NotFoundError (404)  │ OperationFailedError 400 │
    │ delete       │ NotFoundError (404)  │ OperationFailedError 400 │
    └──────────────┴──────────────────────┴──────────────────────────┘
    Validation failures raise ValidationError (400) before the store is called.
"""

import logging
from typing import Any, Mapping, Optional

from catalog_api.exceptions import (
    CatalogError,
    DatabaseError,
    NotFoundError,
    OperationFailedError,
    ValidationError,
)
from catalog_api.repositories.product_repository import ProductRepository
from catalog_api.schemas.product import ProductListResponse, ProductResponse
from catalog_api.services.validation import (
    MAX_STORE_INT,
    parse_positive_int,
    validate_product_fields,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


def compute_skip(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def compute_total_pages(count: int, page_size: int) -> int:
    """ceil(count / page_size) in integer arithmetic."""
    return (count + page_size - 1) // page_size


def _ensure_addressable(product_id: int) -> None:
    # No stored row can carry an id outside the id column's range
    if not 1 <= product_id <= MAX_STORE_INT:
        raise NotFoundError(resource="product", resource_id=product_id)


class ProductService:
    """
    Business logic for the product resource.

    Every method takes the repository as its first argument, so one
    stateless instance serves all requests and tests can pass an AsyncMock.
    """

    async def list_products(
        self,
        repository: ProductRepository,
        page: Optional[str] = None,
        page_size: Optional[str] = None,
    ) -> ProductListResponse:
        """
        Return one page of products inside the pagination envelope.

        page and page_size arrive as raw query text and are parsed here.
        Page numbers past the last page return an empty results list.
        """
        page_number = parse_positive_int(page, "page", DEFAULT_PAGE)
        page_size_number = parse_positive_int(page_size, "page_size", DEFAULT_PAGE_SIZE)
        skip = compute_skip(page_number, page_size_number)
        if skip > MAX_STORE_INT:
            raise ValidationError(
                "The query parameter [page] is too large for the given page_size",
                field="page",
                context={"page": page_number, "page_size": page_size_number},
            )

        try:
            products = await repository.find_many(skip=skip, take=page_size_number)
            count = await repository.count()
        except Exception as e:
            logger.error("Store error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not list the products",
                context={"error_type": type(e).__name__},
            )

        return ProductListResponse(
            count=count,
            total_pages=compute_total_pages(count, page_size_number),
            page_size=page_size_number,
            page=page_number,
            results=[ProductResponse.model_validate(p) for p in products],
        )

    async def get_product(self, repository: ProductRepository, product_id: int) -> ProductResponse:
        _ensure_addressable(product_id)
        try:
            product = await repository.find_unique(product_id)
        except Exception as e:
            logger.error("Store error fetching product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the product",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

        if product is None:
            raise NotFoundError(resource="product", resource_id=product_id)
        return ProductResponse.model_validate(product)

    async def create_product(
        self,
        repository: ProductRepository,
        data: Mapping[str, Any],
    ) -> ProductResponse:
        """
        Create a product after checking name → category → price.

        Raises:
            ValidationError:      a field is missing or malformed (400)
            OperationFailedError: the store rejected the insert (400)
        """
        fields = validate_product_fields(data)
        try:
            product = await repository.create(fields)
        except Exception as e:
            logger.error("Store error creating product: %s", str(e), exc_info=True)
            raise OperationFailedError(
                message="Could not create the product",
                context={"error_type": type(e).__name__},
            )

        logger.info("Product %s created", product.id)
        return ProductResponse.model_validate(product)

    async def update_product(
        self,
        repository: ProductRepository,
        product_id: int,
        data: Mapping[str, Any],
    ) -> ProductResponse:
        """Apply a partial update; only the supplied fields change."""
        fields = validate_product_fields(data, partial=True)
        _ensure_addressable(product_id)
        try:
            if fields:
                product = await repository.update(product_id, fields)
            else:
                product = await repository.find_unique(product_id)
                if product is None:
                    raise NotFoundError(resource="product", resource_id=product_id)
        except CatalogError:
            raise
        except Exception as e:
            logger.error("Store error updating product %s: %s", product_id, str(e))
            raise OperationFailedError(
                message="Could not update the product",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

        return ProductResponse.model_validate(product)

    async def delete_product(self, repository: ProductRepository, product_id: int) -> None:
        _ensure_addressable(product_id)
        try:
            await repository.delete(product_id)
        except CatalogError:
            raise
        except Exception as e:
            logger.error("Store error deleting product %s: %s", product_id, str(e))
            raise OperationFailedError(
                message="Could not delete the product",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

        logger.info("Product %s deleted", product_id)


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; the repository is passed in per call
product_service = ProductService()
