# bakery/schemas/admin.py
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from bakery.schemas.common import strip_required

# Back-office roles. Customers are anonymous and have no account.
Role = Literal["admin", "manager"]


class AdminLogin(SQLModel):
    """
    Login payload; `username` may also be the account email.
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AdminCreate(SQLModel):
    """
    Admin-only payload for creating a back-office account.
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    full_name: str = Field(min_length=1, max_length=200)
    role: Role = "admin"

    @field_validator("username", "full_name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)


class AdminRead(SQLModel):
    """Response schema returned to clients (never includes the hash)."""

    id: int
    username: str
    email: str
    full_name: str
    role: Role
    is_active: bool
    last_login: datetime | None
    created_at: datetime


class LoginResult(SQLModel):
    token: str
    token_type: str = "bearer"
    admin: AdminRead
