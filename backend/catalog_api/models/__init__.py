"""ORM models. Importing this package registers every table with Base.metadata."""

from catalog_api.models.product import Product

__all__ = ["Product"]
