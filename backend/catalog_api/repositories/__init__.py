"""
Catalog API — Repositories Package
====================================

What:  The Storage Gateway layer: the only code that issues SQLAlchemy queries.
Why:   Services depend on a small, mockable interface instead of sessions.

Repository Inventory:
    - ProductRepository: find_many / count / find_unique / create / update / delete
"""

from catalog_api.repositories.product_repository import ProductRepository, get_product_repository

__all__ = ["ProductRepository", "get_product_repository"]
