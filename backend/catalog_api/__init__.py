"""
Catalog API — Application Package Initializer
===============================================

What: Marks the `catalog_api` directory as a Python package.
Why:  Enables module imports like `from catalog_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The service follows the same layered shape for every request:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Resource Handler)       │  ← Validation, pagination, error mapping
    ├─────────────────────────────────────┤
    │   Repositories (Storage Gateway)    │  ← SQLAlchemy queries on Product
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine + session lifecycle
    └─────────────────────────────────────┘

    Routes never touch SQLAlchemy directly, and repositories never know
    about HTTP status codes.
"""

__version__ = "1.0.0"
