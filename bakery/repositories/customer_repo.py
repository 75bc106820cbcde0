# bakery/repositories/customer_repo.py
from datetime import datetime, timezone

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session

from bakery.models.customer import Customer


class CustomerRepository:
    """
    Data access layer for customers.

    NOTE:
      - No commits here; the upsert runs inside the order transaction.
    """

    def upsert_by_phone(
        self,
        session: Session,
        *,
        name: str,
        phone: str,
        email: str | None,
        address: str,
    ) -> int:
        """
        Insert a customer or overwrite name/email/address of the row that
        already owns `phone`, in one statement. Returns the customer id.

        Relies on the unique index on customers.phone, so two concurrent
        first orders for the same phone still end up on one row.
        """
        now = datetime.now(timezone.utc)
        table = Customer.__table__

        dialect = session.get_bind().dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert

        stmt = insert(table).values(
            name=name,
            phone=phone,
            email=email,
            address=address,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["phone"],
            set_={
                "name": stmt.excluded.name,
                "email": stmt.excluded.email,
                "address": stmt.excluded.address,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(table.c.id)

        return int(session.connection().execute(stmt).scalar_one())
