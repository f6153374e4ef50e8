"""
Admin dashboard - sales stats, recent orders, status mix, and activity feed.
"""

import logging
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Count, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone

from apps.web.accounts.actor import Actor
from apps.web.accounts.models import Account, Role
from apps.web.core.exceptions import AuthorizationError
from apps.web.orders.models import Order, OrderStatus

from .serializers import (
    ActivitySchema,
    DashboardSchema,
    DashboardStatsSchema,
    RecentOrderSchema,
    SalesPointSchema,
    StatusShareSchema,
)

logger = logging.getLogger(__name__)

GUEST = "Guest"
RECENT_ORDER_COUNT = 5
ACTIVITY_COUNT = 4
SALES_DAYS = 7
MIN_BAR_PERCENTAGE = Decimal("5")

STATUS_COLORS = {
    OrderStatus.DELIVERED: "green",
    OrderStatus.PREPARING: "blue",
    OrderStatus.PENDING: "yellow",
    OrderStatus.CANCELLED: "red",
    OrderStatus.READY: "purple",
}

ACTIVITY_TEXT = {
    OrderStatus.PENDING: ("New order received", "Order #{id} from {customer}"),
    OrderStatus.PREPARING: ("Order being prepared", "Order #{id} is now being prepared"),
    OrderStatus.READY: ("Order ready", "Order #{id} is ready for delivery"),
    OrderStatus.DELIVERED: ("Order completed", "Order #{id} marked as delivered"),
    OrderStatus.CANCELLED: ("Order cancelled", "Order #{id} was cancelled"),
}


def _round(value: Decimal, places: str = "0.1") -> Decimal:
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def _customer_name(order: Order) -> str:
    return order.account.full_name or GUEST


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def time_ago(moment: datetime, now: datetime | None = None) -> str:
    """Human-readable age of a timestamp ("just now", "5 mins ago", ...)."""
    now = now or timezone.now()
    delta = now - moment

    minutes = int(delta.total_seconds() // 60)
    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes} mins ago"
    hours = minutes // 60
    if hours < 24:
        return _plural(hours, "hour")
    days = delta.days
    if days < 7:
        return _plural(days, "day")
    if days < 30:
        return _plural(days // 7, "week")
    return moment.strftime("%b %d, %Y")


def monthly_growth(current: Decimal, previous: Decimal) -> Decimal:
    """Month-over-month sales growth in percent, rounded to 1 decimal."""
    if previous > 0:
        return _round((current - previous) / previous * 100)
    if current > 0:
        return Decimal("100.0")
    return Decimal("0.0")


def _sales_between(start: datetime, end: datetime | None = None) -> Decimal:
    qs = Order.objects.exclude(status=OrderStatus.CANCELLED).filter(
        created_at__gte=start
    )
    if end is not None:
        qs = qs.filter(created_at__lt=end)
    return qs.aggregate(total=Sum("total_price"))["total"] or Decimal("0")


def _stats(now: datetime) -> DashboardStatsSchema:
    billable = Order.objects.exclude(status=OrderStatus.CANCELLED)
    totals = billable.aggregate(total=Sum("total_price"), count=Count("pk"))

    start_of_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    start_of_last_month = (start_of_month - timedelta(days=1)).replace(day=1)

    current = _sales_between(start_of_month)
    previous = _sales_between(start_of_last_month, start_of_month)

    return DashboardStatsSchema(
        total_sales=totals["total"] or Decimal("0"),
        total_orders=totals["count"],
        active_users=Account.objects.filter(role=Role.CUSTOMER).count(),
        monthly_growth=monthly_growth(current, previous),
    )


def _sales_data(now: datetime) -> list[SalesPointSchema]:
    today = timezone.localdate(now)
    first_day = today - timedelta(days=SALES_DAYS - 1)

    rows = (
        Order.objects.exclude(status=OrderStatus.CANCELLED)
        .annotate(day=TruncDate("created_at"))
        .filter(day__gte=first_day)
        .values("day")
        .annotate(total=Sum("total_price"))
        .order_by()
    )
    by_day = {row["day"]: row["total"] for row in rows}
    best = max(by_day.values(), default=Decimal("0"))

    points = []
    for offset in range(SALES_DAYS):
        day = first_day + timedelta(days=offset)
        total = by_day.get(day, Decimal("0"))
        percentage = total / best * 100 if best > 0 else Decimal("0")
        if total > 0 and percentage < MIN_BAR_PERCENTAGE:
            percentage = MIN_BAR_PERCENTAGE
        points.append(
            SalesPointSchema(
                day=day.strftime("%a"),
                sales=total,
                percentage=_round(percentage, "1"),
            )
        )
    return points


def _status_distribution() -> list[StatusShareSchema]:
    counts = dict(
        Order.objects.values_list("status").annotate(n=Count("pk")).order_by()
    )
    total = sum(counts.values())

    shares = []
    for status in OrderStatus:
        count = counts.get(status.value, 0)
        percentage = _round(Decimal(count) / total * 100) if total else Decimal("0.0")
        shares.append(
            StatusShareSchema(
                status=status.label,
                count=count,
                percentage=percentage,
                color=STATUS_COLORS.get(status, "gray"),
            )
        )
    return shares


def _recent_orders() -> list[RecentOrderSchema]:
    recent = Order.objects.select_related("account")[:RECENT_ORDER_COUNT]
    return [
        RecentOrderSchema(
            order_id=order.pk,
            customer=_customer_name(order),
            total=order.total_price,
            status=order.get_status_display(),
            order_date=order.created_at,
        )
        for order in recent
    ]


def _recent_activity(now: datetime) -> list[ActivitySchema]:
    recent = Order.objects.select_related("account")[:ACTIVITY_COUNT]

    activity = []
    for index, order in enumerate(recent, start=1):
        action, template = ACTIVITY_TEXT[order.status]
        activity.append(
            ActivitySchema(
                id=index,
                action=action,
                description=template.format(id=order.pk, customer=_customer_name(order)),
                time=time_ago(order.created_at, now),
                type="order",
            )
        )
    return activity


def get_dashboard(actor: Actor) -> DashboardSchema:
    """
    Build the admin dashboard.

    Raises:
        AuthorizationError: If the actor is not an admin
    """
    if not actor.is_admin:
        logger.warning("Account %s attempted to open the dashboard", actor.account_id)
        raise AuthorizationError("Only admins can view the dashboard.")

    now = timezone.now()
    logger.info("Building admin dashboard for account %s", actor.account_id)

    return DashboardSchema(
        stats=_stats(now),
        sales_data=_sales_data(now),
        recent_orders=_recent_orders(),
        recent_activity=_recent_activity(now),
        order_status_distribution=_status_distribution(),
    )
