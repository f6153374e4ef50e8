"""
Pydantic schemas for the admin dashboard response.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class DashboardStatsSchema(BaseModel):
    total_sales: Decimal
    total_orders: int
    active_users: int
    monthly_growth: Decimal


class SalesPointSchema(BaseModel):
    """One day of sales; `percentage` is the bar height relative to the best day."""

    day: str
    sales: Decimal
    percentage: Decimal


class RecentOrderSchema(BaseModel):
    order_id: int
    customer: str
    total: Decimal
    status: str
    order_date: datetime


class ActivitySchema(BaseModel):
    id: int
    action: str
    description: str
    time: str
    type: str


class StatusShareSchema(BaseModel):
    status: str
    count: int
    percentage: Decimal
    color: str


class DashboardSchema(BaseModel):
    """Everything the admin dashboard page renders."""

    stats: DashboardStatsSchema
    sales_data: list[SalesPointSchema]
    recent_orders: list[RecentOrderSchema]
    recent_activity: list[ActivitySchema]
    order_status_distribution: list[StatusShareSchema]
