# bakery/models/branch.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Branch(SQLModel, table=True):
    """
    Physical shop that prepares and delivers orders.
    """

    __tablename__ = "branches"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=200)
    address: str
    phone: str = Field(max_length=20)
    is_active: bool = Field(default=True, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
