# bakery/models/payment_method.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class PaymentMethod(SQLModel, table=True):
    """
    Accepted payment method (cash on delivery, bank transfer, ...).

    `code` is the stable identifier used by clients, e.g. "cod".
    """

    __tablename__ = "payment_methods"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    code: str = Field(max_length=50, unique=True, index=True)
    icon: str | None = None
    is_active: bool = Field(default=True, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
