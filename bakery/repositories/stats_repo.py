# bakery/repositories/stats_repo.py
from datetime import datetime

from sqlalchemy import func
from sqlmodel import Session, select

from bakery.models.branch import Branch
from bakery.models.category import Category
from bakery.models.order import Order
from bakery.models.product import Product


class StatsRepository:
    """
    Read-only aggregated queries for order statistics and the dashboard.

    Time bounds are half-open: start <= created_at < end.
    """

    def count_orders(
        self,
        session: Session,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> int:
        stmt = self._in_range(select(func.count(Order.id)), start, end)
        return int(session.exec(stmt).one() or 0)

    def total_revenue(
        self,
        session: Session,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> float:
        """
        Sum of total_amount for all non-cancelled orders.
        """
        stmt = select(func.coalesce(func.sum(Order.total_amount), 0)).where(
            Order.status != "cancelled"
        )
        stmt = self._in_range(stmt, start, end)
        value = session.exec(stmt).one()
        return float(value or 0.0)

    def orders_by_status(
        self,
        session: Session,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[tuple]:
        stmt = select(Order.status, func.count(Order.id))
        stmt = self._in_range(stmt, start, end)
        stmt = stmt.group_by(Order.status).order_by(Order.status)
        return list(session.exec(stmt).all())

    def daily_revenue(
        self,
        session: Session,
        start: datetime,
        end: datetime,
    ) -> list[tuple]:
        """
        Revenue and order count per calendar day, excluding cancelled orders.

        The day column is a `date` on Postgres and an ISO string on SQLite.
        """
        day_expr = func.date(Order.created_at)

        stmt = (
            select(
                day_expr.label("day"),
                func.coalesce(func.sum(Order.total_amount), 0).label("revenue"),
                func.count(Order.id).label("order_count"),
            )
            .where(Order.status != "cancelled")
        )
        stmt = self._in_range(stmt, start, end)
        stmt = stmt.group_by(day_expr).order_by(day_expr)

        return list(session.exec(stmt).all())

    # ---- Catalog counters ----

    def count_available_products(self, session: Session) -> int:
        stmt = select(func.count(Product.id)).where(Product.is_available == True)
        return int(session.exec(stmt).one() or 0)

    def count_active_categories(self, session: Session) -> int:
        stmt = select(func.count(Category.id)).where(Category.is_active == True)
        return int(session.exec(stmt).one() or 0)

    def count_active_branches(self, session: Session) -> int:
        stmt = select(func.count(Branch.id)).where(Branch.is_active == True)
        return int(session.exec(stmt).one() or 0)

    @staticmethod
    def _in_range(stmt, start: datetime | None, end: datetime | None):
        if start is not None:
            stmt = stmt.where(Order.created_at >= start)
        if end is not None:
            stmt = stmt.where(Order.created_at < end)
        return stmt
