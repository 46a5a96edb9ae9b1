"""Admin sales reports."""

from datetime import timedelta

from django.contrib.auth import get_user_model
from django.db.models import Count, Sum
from django.db.models.functions import ExtractHour, TruncDate
from django.utils import timezone
from django.views import View

from megashop.catalog.models import Product
from megashop.core.mixins import AdminRequiredMixin
from megashop.core.pages import render_page

from .models import Order, OrderItem

DEFAULT_DAYS = 30
MAX_DAYS = 365


def parse_days(value):
    """Report window in days: positive, at most a year, default 30."""
    try:
        days = int(value)
    except (TypeError, ValueError):
        return DEFAULT_DAYS
    if days <= 0:
        return DEFAULT_DAYS
    return min(days, MAX_DAYS)


def top_selling_products(since, limit=5):
    return [
        {"name": row["product__name"], "sales": row["sales"]}
        for row in (
            OrderItem.objects.filter(order__created_at__date__gte=since, product__isnull=False)
            .values("product_id", "product__name")
            .annotate(sales=Sum("quantity"))
            .order_by("-sales", "product__name")[:limit]
        )
    ]


def daily_trends(since, today):
    """Order count and revenue per day from ``since`` to ``today``, zero-filled."""
    rows = (
        Order.objects.filter(created_at__date__gte=since)
        .annotate(day=TruncDate("created_at"))
        .values("day")
        .annotate(orders=Count("id"), revenue=Sum("total"))
    )
    by_day = {row["day"]: row for row in rows}

    orders, revenue = [], []
    day = since
    while day <= today:
        row = by_day.get(day, {})
        orders.append({"name": day.isoformat(), "orders": row.get("orders", 0)})
        revenue.append({"name": day.isoformat(), "revenue": row.get("revenue") or 0})
        day += timedelta(days=1)
    return orders, revenue


def hourly_trends(today):
    """Order count and revenue per hour of ``today``, 24 zero-filled buckets."""
    rows = (
        Order.objects.filter(created_at__date=today)
        .annotate(hour=ExtractHour("created_at"))
        .values("hour")
        .annotate(orders=Count("id"), revenue=Sum("total"))
    )
    by_hour = {row["hour"]: row for row in rows}

    orders, revenue = [], []
    for hour in range(24):
        label = f"{hour:02d}:00"
        row = by_hour.get(hour, {})
        orders.append({"name": label, "orders": row.get("orders", 0)})
        revenue.append({"name": label, "revenue": row.get("revenue") or 0})
    return orders, revenue


class ReportView(AdminRequiredMixin, View):
    def get(self, request):
        days = parse_days(request.GET.get("days", DEFAULT_DAYS))
        today = timezone.localdate()
        since = today - timedelta(days=days)

        recent = Order.objects.filter(created_at__date__gte=since)
        totals = recent.aggregate(count=Count("id"), revenue=Sum("total"))

        if days == 1:
            order_trend, revenue_trend = hourly_trends(today)
        else:
            order_trend, revenue_trend = daily_trends(since, today)

        return render_page(request, "admin/reports", {
            "totalUsers": get_user_model().objects.count(),
            "totalProducts": Product.objects.count(),
            "totalOrders": totals["count"],
            "totalRevenue": totals["revenue"] or 0,
            "topSellingProducts": top_selling_products(since),
            "orderTrend": order_trend,
            "revenueTrend": revenue_trend,
            "timeRange": str(days),
        })
