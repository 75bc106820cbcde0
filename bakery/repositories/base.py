# bakery/repositories/base.py
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Generic, TypeVar

from sqlmodel import Session, SQLModel

ModelT = TypeVar("ModelT", bound=SQLModel)


def start_of_day(day: date) -> datetime:
    """UTC midnight at the start of `day`."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    """UTC midnight after `day` (exclusive upper bound)."""
    return start_of_day(day + timedelta(days=1))


class Repository(Generic[ModelT]):
    """
    Shared persistence routines for simple tables.

    Subclasses set `model` and add their own queries.
    """

    model: type[ModelT]

    def get_by_id(self, session: Session, obj_id: int) -> ModelT | None:
        """Return a row by primary key regardless of its active flag."""
        return session.get(self.model, obj_id)

    def create(self, session: Session, obj: ModelT) -> ModelT:
        session.add(obj)
        session.commit()
        session.refresh(obj)
        return obj

    def save(self, session: Session, obj: ModelT) -> ModelT:
        obj.updated_at = datetime.now(timezone.utc)
        session.add(obj)
        session.commit()
        session.refresh(obj)
        return obj

    def update(self, session: Session, obj: ModelT, changes: dict[str, Any]) -> ModelT:
        """
        Apply a partial update.

        `changes` holds only the fields the client sent (see
        `model_dump(exclude_unset=True)`); absent fields are untouched.
        """
        obj.sqlmodel_update(changes)
        return self.save(session, obj)
