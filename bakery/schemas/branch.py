# bakery/schemas/branch.py
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from bakery.schemas.common import strip_required

PHONE_PATTERN = r"^[0-9]{10,11}$"


class BranchCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=200)
    address: str = Field(min_length=1)
    phone: str = Field(schema_extra={"pattern": PHONE_PATTERN})
    is_active: bool = True

    @field_validator("name", "address")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)


class BranchUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    address: str | None = Field(default=None, min_length=1)
    phone: str | None = Field(default=None, schema_extra={"pattern": PHONE_PATTERN})
    is_active: bool | None = None


class BranchRead(SQLModel):
    id: int
    name: str
    address: str
    phone: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
