# bakery/services/stats_service.py
from datetime import date, datetime, timedelta, timezone

from sqlmodel import Session

from bakery.core.errors import AppError
from bakery.repositories.base import end_of_day, start_of_day
from bakery.repositories.stats_repo import StatsRepository
from bakery.schemas.stats import (
    DailyRevenue,
    DashboardStats,
    OrderStatistics,
    StatusCount,
)

# Length of the daily revenue series
REVENUE_SERIES_DAYS = 7


def _as_date(value) -> date:
    # func.date() yields a date on Postgres and a "YYYY-MM-DD" string on SQLite
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class StatsService:
    """
    Read-only aggregates over orders and the catalog.

    Days are UTC calendar days. Revenue never includes cancelled orders.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    @staticmethod
    def _today() -> date:
        return datetime.now(timezone.utc).date()

    def get_order_statistics(
        self,
        session: Session,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> OrderStatistics:
        """
        Order overview.

        - total_orders / total_revenue / orders_by_status honour the
          optional date range (inclusive on both ends).
        - today_orders always refers to the current UTC day.
        - daily_revenue covers the 7 days ending at `date_to` (or today),
          clipped to `date_from`, zero-filled, oldest first.
        """
        if date_from and date_to and date_from > date_to:
            raise AppError(
                "date_from must not be after date_to",
                date_from=date_from.isoformat(),
                date_to=date_to.isoformat(),
            )

        start = start_of_day(date_from) if date_from else None
        end = end_of_day(date_to) if date_to else None
        today = self._today()

        total_orders = self.repo.count_orders(session, start, end)
        today_orders = self.repo.count_orders(
            session, start_of_day(today), end_of_day(today)
        )
        total_revenue = self.repo.total_revenue(session, start, end)

        orders_by_status = [
            StatusCount(status=status, count=int(count))
            for status, count in self.repo.orders_by_status(session, start, end)
        ]

        return OrderStatistics(
            total_orders=total_orders,
            today_orders=today_orders,
            total_revenue=total_revenue,
            orders_by_status=orders_by_status,
            daily_revenue=self._daily_series(session, date_from, date_to or today),
        )

    def _daily_series(
        self,
        session: Session,
        date_from: date | None,
        last_day: date,
    ) -> list[DailyRevenue]:
        first_day = last_day - timedelta(days=REVENUE_SERIES_DAYS - 1)
        if date_from and date_from > first_day:
            first_day = date_from

        by_day: dict[date, tuple[float, int]] = {}
        for day, revenue, order_count in self.repo.daily_revenue(
            session, start_of_day(first_day), end_of_day(last_day)
        ):
            by_day[_as_date(day)] = (float(revenue or 0), int(order_count or 0))

        series: list[DailyRevenue] = []
        day = first_day
        while day <= last_day:
            revenue, order_count = by_day.get(day, (0.0, 0))
            series.append(
                DailyRevenue(date=day, revenue=revenue, order_count=order_count)
            )
            day += timedelta(days=1)
        return series

    def get_dashboard_stats(self, session: Session) -> DashboardStats:
        today = self._today()
        return DashboardStats(
            products=self.repo.count_available_products(session),
            categories=self.repo.count_active_categories(session),
            branches=self.repo.count_active_branches(session),
            orders=self.repo.count_orders(session),
            today_orders=self.repo.count_orders(
                session, start_of_day(today), end_of_day(today)
            ),
            total_revenue=self.repo.total_revenue(session),
        )
