"""
Catalog API — Product SQLAlchemy Model
========================================

What:  ORM model representing the `products` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by ProductRepository for CRUD operations.

Table Design Rationale:
    - Integer autoincrement primary key: assigned by the store on insert,
      never reused to address a deleted row
    - name / category: required short text
    - price: floating-point, CHECK price >= 0 backs the API validation
"""

from sqlalchemy import CheckConstraint, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_api.database import Base


class Product(Base):
    """
    A catalog entry.

    Lifecycle:
        1. Created by POST (store assigns id)
        2. Read any number of times
        3. Partially updated by PATCH (any subset of name/category/price)
        4. Deleted by DELETE; the id then resolves to "not found"
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    category: Mapped[str] = mapped_column(String(255), nullable=False)

    price: Mapped[float] = mapped_column(Float, nullable=False)

    # sqlite_autoincrement: SQLite would otherwise hand a deleted max id to the next insert
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
