"""
Catalog API — Sample Catalog Route
====================================

What:  GET /api/sample-products returns the fixed fifty-item demo list.
Why:   Lets front-end demos render a populated catalog without a database.
How:   Serves the cached JSON asset; never touches the store.
"""

from typing import List

from fastapi import APIRouter

from catalog_api.schemas.product import SampleProduct
from catalog_api.services.sample_catalog import get_sample_products

router = APIRouter(prefix="/api", tags=["Samples"])


@router.get(
    "/sample-products",
    response_model=List[SampleProduct],
    summary="Static list of sample products",
)
async def list_sample_products() -> List[SampleProduct]:
    return get_sample_products()
