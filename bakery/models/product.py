# bakery/models/product.py
from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    `price` is authoritative: prices sent by clients are only checked
    against it. `is_available` is a soft-delete flag, products are
    never physically removed.
    """

    __tablename__ = "products"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(
        max_length=200,
        index=True,
        description="Display name of the product",
    )

    description: str | None = Field(
        default=None,
        max_length=1000,
    )

    price: Decimal = Field(
        max_digits=12,
        decimal_places=2,
        description="Unit price (VND)",
    )

    image_url: str | None = Field(
        default=None,
        description="Public URL of the product image",
    )

    category_id: int = Field(
        foreign_key="categories.id",
        index=True,
    )

    is_available: bool = Field(
        default=True,
        index=True,
        description="Whether this product is visible on the storefront",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
