# bakery/schemas/payment_method.py
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from bakery.schemas.common import strip_required


class PaymentMethodCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=50)
    icon: str | None = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return strip_required(v).lower()


class PaymentMethodUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=100)
    code: str | None = Field(default=None, min_length=1, max_length=50)
    icon: str | None = None
    is_active: bool | None = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return strip_required(v).lower()


class PaymentMethodRead(SQLModel):
    id: int
    name: str
    code: str
    icon: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
