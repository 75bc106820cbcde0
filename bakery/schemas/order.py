# bakery/schemas/order.py
from datetime import datetime
from decimal import Decimal
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from sqlmodel import SQLModel

from bakery.schemas.branch import PHONE_PATTERN
from bakery.schemas.common import Pagination, strip_optional, strip_required

OrderStatus = Literal[
    "pending",
    "confirmed",
    "preparing",
    "delivering",
    "completed",
    "cancelled",
]
ORDER_STATUSES: tuple[str, ...] = get_args(OrderStatus)


class CartProduct(BaseModel):
    """
    Product as the client saw it when it was put in the cart.
    `name` and `price` are advisory; the server re-checks the price.
    """

    id: int = Field(gt=0)
    name: str
    price: Decimal = Field(gt=0)


class OrderItemCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    product: CartProduct
    quantity: int = Field(ge=1)


class CustomerInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, max_length=200)
    phone: str = Field(pattern=PHONE_PATTERN)
    email: EmailStr | None = None
    address: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("name", "address")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)


class OrderCreate(BaseModel):
    """
    Checkout payload.

    Client provides:
      - items with the cached product id / name / price
      - customerInfo (guest checkout, keyed by phone)
      - branch_id, payment_method_id
      - total_amount computed client-side
      - notes (optional, max 500 chars)

    Unknown keys are dropped rather than rejected.

    Backend derives:
      - order_code
      - status = 'pending'
      - total_amount from live catalog prices
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    items: list[OrderItemCreate] = Field(min_length=1)
    customer_info: CustomerInfo = Field(alias="customerInfo")
    branch_id: int = Field(gt=0)
    payment_method_id: int = Field(gt=0)
    total_amount: Decimal = Field(gt=0)
    notes: str | None = Field(default=None, max_length=500)

    @field_validator("notes")
    @classmethod
    def normalize_notes(cls, v: str | None) -> str | None:
        return strip_optional(v)


class OrderCustomer(SQLModel):
    id: int | None
    name: str
    phone: str
    email: str | None
    address: str


class OrderBranch(SQLModel):
    id: int
    name: str | None = None
    address: str | None = None
    phone: str | None = None


class OrderPaymentMethod(SQLModel):
    id: int
    name: str | None = None
    code: str | None = None


class OrderItemRead(SQLModel):
    """
    Representation of a single order line item.
    """

    id: int
    product_id: int
    product_name: str
    product_price: float
    quantity: int
    subtotal: float
    product_image: str | None = None


class OrderRead(SQLModel):
    """
    Order joined with its customer snapshot, branch and payment method
    (without items).
    """

    id: int
    order_code: str
    customer: OrderCustomer
    branch: OrderBranch
    payment_method: OrderPaymentMethod
    total_amount: float
    status: OrderStatus
    notes: str | None
    created_at: datetime
    updated_at: datetime


class OrderWithItemsRead(OrderRead):
    """
    Full order view including items.
    """

    items: list[OrderItemRead]


class OrderPage(SQLModel):
    orders: list[OrderRead]
    pagination: Pagination


class OrderStatusUpdate(SQLModel):
    """
    Staff payload to change order status.

    Kept as a plain string so unknown labels reach the service and come
    back as an `invalid_status` error.
    """

    model_config = ConfigDict(extra="forbid")

    status: str
