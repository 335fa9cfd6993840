"""
Catalog API — Product Route Handlers
======================================

What:  HTTP surface of the product resource.
Why:   Maps methods and paths onto ProductService operations.
How:   Extracts path/query/body values, delegates to the service, returns the
       result. Errors are raised as exceptions and formatted by the global
       handlers in main.py.

The router carries no prefix; main.py mounts it at settings.api_prefix
(default /api/products):

    GET    {prefix}          list (page, page_size)
    GET    {prefix}/{id}     get by id
    POST   {prefix}          create
    PATCH  {prefix}/{id}     partial update
    DELETE {prefix}/{id}     delete
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, Response, status

from catalog_api.repositories.product_repository import ProductRepository, get_product_repository
from catalog_api.schemas.product import (
    ErrorResponse,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from catalog_api.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Product"])


@router.get(
    "",
    response_model=ProductListResponse,
    responses={
        400: {"description": "Invalid page or page_size", "model": ErrorResponse},
        500: {"description": "The products could not be listed", "model": ErrorResponse},
    },
    summary="Returns the list of all products with pagination",
)
@router.get("/", response_model=ProductListResponse, include_in_schema=False)
async def list_products(
    page: Optional[str] = Query(default=None, description="The page number (default 1)"),
    page_size: Optional[str] = Query(default=None, description="Number of items per page (default 10)"),
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductListResponse:
    return await product_service.list_products(repository, page=page, page_size=page_size)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        404: {"description": "Product not found", "model": ErrorResponse},
        500: {"description": "The product could not be fetched", "model": ErrorResponse},
    },
    summary="Get a product by ID",
)
async def get_product(
    product_id: int = Path(description="The product ID"),
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductResponse:
    return await product_service.get_product(repository, product_id)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing required field or creation error", "model": ErrorResponse},
    },
    summary="Create a new product",
)
@router.post(
    "/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_product(
    payload: Optional[ProductCreate] = Body(default=None),
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductResponse:
    data = payload.model_dump() if payload is not None else {}
    return await product_service.create_product(repository, data)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"description": "Invalid field or update error", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Update a product by ID",
)
async def update_product(
    payload: Optional[ProductUpdate] = Body(default=None),
    product_id: int = Path(description="The product ID"),
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductResponse:
    data = payload.model_dump(exclude_unset=True) if payload is not None else {}
    return await product_service.update_product(repository, product_id, data)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Deletion error", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Delete a product by ID",
)
async def delete_product(
    product_id: int = Path(description="The product ID"),
    repository: ProductRepository = Depends(get_product_repository),
) -> Response:
    await product_service.delete_product(repository, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
