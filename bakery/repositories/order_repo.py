# bakery/repositories/order_repo.py
from datetime import date

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from bakery.models.branch import Branch
from bakery.models.order import Order, OrderItem
from bakery.models.payment_method import PaymentMethod
from bakery.models.product import Product
from bakery.repositories.base import end_of_day, start_of_day

OrderRow = tuple[Order, Branch | None, PaymentMethod | None]


class OrderRepository:
    """
    Data access layer for orders and order_items.

    NOTE:
      - No commits here; order creation is a multi-step transaction.
        The service is responsible for calling session.commit().
      - Read queries return (Order, Branch, PaymentMethod) rows so the
        service can render display fields without extra lookups.
    """

    # ---- Orders ----

    def get_by_id(self, session: Session, order_id: int) -> Order | None:
        return session.get(Order, order_id)

    def get_by_code(self, session: Session, order_code: str) -> Order | None:
        stmt = select(Order).where(Order.order_code == order_code)
        return session.exec(stmt).first()

    def get_row(self, session: Session, order_id: int) -> OrderRow | None:
        stmt = self._joined().where(Order.id == order_id)
        return session.exec(stmt).first()

    def list_rows(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 20,
        status: str | None = None,
        branch_id: int | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ) -> list[OrderRow]:
        stmt = self._filter(
            self._joined(),
            status=status,
            branch_id=branch_id,
            date_from=date_from,
            date_to=date_to,
            search=search,
        )
        stmt = (
            stmt.order_by(Order.created_at.desc(), Order.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def count(
        self,
        session: Session,
        status: str | None = None,
        branch_id: int | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ) -> int:
        stmt = self._filter(
            select(func.count(Order.id)),
            status=status,
            branch_id=branch_id,
            date_from=date_from,
            date_to=date_to,
            search=search,
        )
        return int(session.exec(stmt).one() or 0)

    def create_order(self, session: Session, order: Order) -> Order:
        """
        Insert an Order without committing, but ensure id is populated.
        """
        session.add(order)
        session.flush()  # Assign PK
        session.refresh(order)
        return order

    def update_order(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.flush()
        session.refresh(order)
        return order

    # ---- Order items ----

    def list_items_for_order(
        self,
        session: Session,
        order_id: int,
    ) -> list[tuple[OrderItem, str | None]]:
        """
        Items of an order with the product's current image URL.
        """
        stmt = (
            select(OrderItem, Product.image_url)
            .outerjoin(Product, Product.id == OrderItem.product_id)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.id)
        )
        return list(session.exec(stmt).all())

    def create_items(
        self,
        session: Session,
        items: list[OrderItem],
    ) -> list[OrderItem]:
        session.add_all(items)
        session.flush()
        return items

    # ---- Helpers ----

    @staticmethod
    def _joined():
        return (
            select(Order, Branch, PaymentMethod)
            .outerjoin(Branch, Branch.id == Order.branch_id)
            .outerjoin(PaymentMethod, PaymentMethod.id == Order.payment_method_id)
        )

    @staticmethod
    def _filter(
        stmt,
        status: str | None,
        branch_id: int | None,
        date_from: date | None,
        date_to: date | None,
        search: str | None,
    ):
        if status:
            stmt = stmt.where(Order.status == status)
        if branch_id is not None:
            stmt = stmt.where(Order.branch_id == branch_id)
        if date_from is not None:
            stmt = stmt.where(Order.created_at >= start_of_day(date_from))
        if date_to is not None:
            stmt = stmt.where(Order.created_at < end_of_day(date_to))
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    col(Order.order_code).ilike(pattern),
                    col(Order.customer_name).ilike(pattern),
                    col(Order.customer_phone).ilike(pattern),
                )
            )
        return stmt
