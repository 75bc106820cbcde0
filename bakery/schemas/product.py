# bakery/schemas/product.py
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from bakery.schemas.common import Pagination, strip_optional, strip_required


class ProductCreate(SQLModel):
    """
    Payload for creating a product (staff only).

    The image is uploaded separately via POST /products/{id}/image.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    image_url: str | None = None
    category_id: int = Field(gt=0)
    is_available: bool = True

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("description", "image_url")
    @classmethod
    def normalize_optional(cls, v: str | None) -> str | None:
        return strip_optional(v)


class ProductUpdate(SQLModel):
    """
    Partial update payload for products.
    All fields are optional; only fields sent by the client are applied.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    price: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    image_url: str | None = None
    category_id: int | None = Field(default=None, gt=0)
    is_available: bool | None = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return strip_required(v)


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    id: int
    name: str
    description: str | None
    price: float
    image_url: str | None
    category_id: int
    category: str | None = None
    is_available: bool
    created_at: datetime
    updated_at: datetime


class ProductPage(SQLModel):
    products: list[ProductRead]
    pagination: Pagination
