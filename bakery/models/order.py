# bakery/models/order.py
from datetime import datetime, timezone
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order.

    Customer contact fields are copied onto the order at checkout so
    later edits to the Customer row do not rewrite history.

    Invariant (checked at creation only):
      total_amount == sum(order_items.subtotal)
    """

    __tablename__ = "orders"

    id: int | None = Field(default=None, primary_key=True)

    order_code: str = Field(
        max_length=20,
        unique=True,
        index=True,
        description="Human readable code, e.g. BM12345678",
    )

    customer_id: int | None = Field(
        default=None,
        foreign_key="customers.id",
        index=True,
    )
    branch_id: int = Field(foreign_key="branches.id", index=True)
    payment_method_id: int = Field(foreign_key="payment_methods.id", index=True)

    total_amount: Decimal = Field(
        max_digits=14,
        decimal_places=2,
        description="Server-computed order total",
    )

    # pending | confirmed | preparing | delivering | completed | cancelled
    status: str = Field(
        default="pending",
        index=True,
        description="Order status lifecycle",
    )

    # Snapshot of the customer at order time
    customer_name: str
    customer_phone: str = Field(index=True)
    customer_email: str | None = None
    delivery_address: str

    notes: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class OrderItem(SQLModel, table=True):
    """
    Line item inside an order.

    Product name and price are snapshots taken at purchase time.
    """

    __tablename__ = "order_items"

    id: int | None = Field(default=None, primary_key=True)

    order_id: int = Field(foreign_key="orders.id", index=True)
    product_id: int = Field(foreign_key="products.id", index=True)

    product_name: str
    product_price: Decimal = Field(
        max_digits=12,
        decimal_places=2,
        description="Unit price at time of order",
    )

    quantity: int = Field(
        gt=0,
        description="Quantity ordered (>=1)",
    )

    subtotal: Decimal = Field(
        max_digits=14,
        decimal_places=2,
        description="product_price * quantity",
    )
