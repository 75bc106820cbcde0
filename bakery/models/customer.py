# bakery/models/customer.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Customer(SQLModel, table=True):
    """
    Guest customer, identified by phone number.

    Customers do not log in. Each order upserts the row for its phone
    number, overwriting name / email / address (last write wins).
    Orders keep their own snapshot of these fields.
    """

    __tablename__ = "customers"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=200)
    phone: str = Field(
        max_length=20,
        unique=True,
        index=True,
        description="Natural key used for de-duplication",
    )
    email: str | None = None
    address: str

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
