# bakery/models/admin_user.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class AdminUser(SQLModel, table=True):
    """
    Back-office account.

    Role:
      - "admin"   : full access, including managing admin users
      - "manager" : catalog and order management
    """

    __tablename__ = "admin_users"

    id: int | None = Field(default=None, primary_key=True)

    username: str = Field(max_length=50, unique=True, index=True)
    email: str = Field(unique=True, index=True)
    password_hash: str
    full_name: str = Field(max_length=200)

    role: str = Field(
        default="admin",
        index=True,
        description="Application role: admin | manager",
    )

    is_active: bool = Field(default=True)
    last_login: datetime | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
