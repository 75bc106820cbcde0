# bakery/schemas/stats.py
from datetime import date

from pydantic import ConfigDict
from sqlmodel import SQLModel


class StatusCount(SQLModel):
    status: str
    count: int


class DailyRevenue(SQLModel):
    """
    Revenue (non-cancelled orders) for one calendar day.
    """
    model_config = ConfigDict(extra="forbid")

    date: date
    revenue: float
    order_count: int


class OrderStatistics(SQLModel):
    """
    Order overview, optionally restricted to a date range.
    """
    model_config = ConfigDict(extra="forbid")

    total_orders: int
    today_orders: int
    total_revenue: float
    orders_by_status: list[StatusCount]
    daily_revenue: list[DailyRevenue]


class DashboardStats(SQLModel):
    """
    Headline counters for the admin dashboard.
    """
    model_config = ConfigDict(extra="forbid")

    products: int
    categories: int
    branches: int
    orders: int
    today_orders: int
    total_revenue: float
