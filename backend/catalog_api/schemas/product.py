"""
Catalog API — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract of the product resource.
Why:   Automatic serialization and OpenAPI document generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and build the schema served at the machine-readable docs path.

Design Decision:
    Request bodies declare every field as optional. Presence and value checks
    run in `services.validation` so that create reports the first missing
    field by name (name → category → price) with a 400, and update reuses the
    same routine. Letting Pydantic reject missing fields would produce a
    422 listing all of them at once.

    price is typed Any so the handler sees the raw JSON value; a lax
    float/str union would already have turned `true` into 1.0.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════

# Documented type of the request price; checked by services.validation
PRICE_SCHEMA = {"anyOf": [{"type": "number"}, {"type": "string"}, {"type": "null"}]}


class ProductCreate(BaseModel):
    """Body of POST; all three fields are required by the handler."""
    name: Optional[str] = Field(default=None, description="The name of the product")
    category: Optional[str] = Field(default=None, description="The category of the product")
    price: Any = Field(
        default=None,
        description="The price of the product; numeric strings such as \"29.99\" are accepted",
        json_schema_extra=PRICE_SCHEMA,
    )

    model_config = {
        "json_schema_extra": {
            "example": {"name": "Product 1", "category": "Category A", "price": 99.99}
        }
    }


class ProductUpdate(BaseModel):
    """Body of PATCH; any subset of the fields."""
    name: Optional[str] = Field(default=None, description="New name")
    category: Optional[str] = Field(default=None, description="New category")
    price: Any = Field(default=None, description="New price", json_schema_extra=PRICE_SCHEMA)

    model_config = {
        "json_schema_extra": {"example": {"price": 79.9}}
    }


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """A stored product."""
    id: int = Field(description="The auto-generated id of the product")
    name: str = Field(description="The name of the product")
    category: str = Field(description="The category of the product")
    price: float = Field(description="The price of the product")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {"id": 1, "name": "Product 1", "category": "Category A", "price": 99.99}
        },
    }


class ProductListResponse(BaseModel):
    """
    Pagination envelope returned by GET /api/products.

    total_pages = ceil(count / page_size); results holds at most page_size items.
    """
    count: int = Field(description="Total number of products in the store")
    total_pages: int = Field(description="Number of pages at this page_size")
    page_size: int = Field(description="Items per page")
    page: int = Field(description="Current page number (1-based)")
    results: List[ProductResponse] = Field(description="Products on this page")


class SampleProduct(BaseModel):
    """An entry of the static sample catalog."""
    id: int
    name: str
    description: str
    price: float
    category: str
    image: str


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    Example:
        {"error": "The field [name] is required"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
