"""Admin customer views.

Customers are not a table of their own: they are derived from orders.
Registered customers are keyed by user id, guests by ``guest_<mobile>``,
so all guest orders placed with the same mobile number count as one
customer.
"""

import uuid

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.db.models import Avg, Case, CharField, Count, Max, Min, Q, Sum, Value, When
from django.db.models.functions import Cast, Concat
from django.http import Http404
from django.shortcuts import redirect
from django.views import View

from megashop.core.mixins import AdminRequiredMixin
from megashop.core.pages import paginate, render_page

from .models import Order
from .serializers import order_to_dict

User = get_user_model()

GUEST_PREFIX = "guest_"
CUSTOMER_SORT_FIELDS = {
    "name": "customer_name",
    "email": "customer_email",
    "first_order_date": "first_order_date",
    "last_order_date": "last_order_date",
    "order_count": "order_count",
    "total_spent": "total_spent",
}
CUSTOMERS_PER_PAGE = 15


def customer_key_expression():
    return Case(
        When(user__isnull=False, then=Cast("user_id", output_field=CharField())),
        default=Concat(Value(GUEST_PREFIX), "mobile"),
        output_field=CharField(),
    )


def normalize_key(key):
    """Canonical form of a customer key (dashed UUID for registered users)."""
    if key.startswith(GUEST_PREFIX):
        return key
    try:
        return str(uuid.UUID(key))
    except ValueError:
        return key


def customer_rows(search="", customer_type="", sort_by="last_order_date", direction="desc"):
    """One aggregated row per customer key."""
    orders = Order.objects.all()
    if search:
        orders = orders.filter(
            Q(name__icontains=search) | Q(email__icontains=search) | Q(mobile__icontains=search)
        )
    if customer_type == "registered":
        orders = orders.filter(user__isnull=False)
    elif customer_type == "guest":
        orders = orders.filter(user__isnull=True)

    column = CUSTOMER_SORT_FIELDS.get(sort_by, "last_order_date")
    ordering = column if direction == "asc" else f"-{column}"

    return (
        orders.annotate(customer_id=customer_key_expression())
        .values("customer_id")
        .annotate(
            customer_name=Max("name"),
            customer_email=Max("email"),
            customer_mobile=Max("mobile"),
            first_order_date=Min("created_at"),
            last_order_date=Max("created_at"),
            order_count=Count("id"),
            total_spent=Sum("total"),
        )
        .order_by(ordering, "customer_id")
    )


def customer_row_to_dict(row):
    key = normalize_key(row["customer_id"])
    return {
        "customer_id": key,
        "name": row["customer_name"],
        "email": row["customer_email"],
        "mobile": row["customer_mobile"],
        "first_order_date": row["first_order_date"].isoformat(),
        "last_order_date": row["last_order_date"].isoformat(),
        "order_count": row["order_count"],
        "total_spent": row["total_spent"],
        "customer_type": "guest" if key.startswith(GUEST_PREFIX) else "registered",
    }


class CustomerListView(AdminRequiredMixin, View):
    def get(self, request):
        filters = {
            "search": request.GET.get("search", "").strip(),
            "type": request.GET.get("type", ""),
            "sort_by": request.GET.get("sort_by", "last_order_date"),
            "sort_direction": request.GET.get("sort_direction", "desc"),
        }
        rows = customer_rows(
            search=filters["search"],
            customer_type=filters["type"],
            sort_by=filters["sort_by"],
            direction=filters["sort_direction"],
        )
        return render_page(request, "admin/customers/index", {
            "customers": paginate(request, rows, CUSTOMERS_PER_PAGE, customer_row_to_dict),
            "filters": filters,
        })


class CustomerDetailView(AdminRequiredMixin, View):
    def get(self, request, key):
        if key.startswith(GUEST_PREFIX):
            mobile = key[len(GUEST_PREFIX):]
            orders = Order.objects.filter(user__isnull=True, mobile=mobile)
            first = orders.order_by("created_at").first()
            if first is None:
                messages.error(request, "Customer not found")
                return redirect("store:admin-customer-list")
            customer = {
                "id": key,
                "name": first.name,
                "email": first.email,
                "mobile": first.mobile,
                "type": "guest",
                "created_at": first.created_at.isoformat(),
            }
        else:
            try:
                user = User.objects.get(pk=uuid.UUID(key))
            except (ValueError, User.DoesNotExist):
                raise Http404("Customer not found")
            orders = Order.objects.filter(user=user)
            latest = orders.order_by("-created_at").first()
            customer = {
                "id": str(user.pk),
                "name": user.name,
                "email": user.email,
                "mobile": latest.mobile if latest else None,
                "type": "registered",
                "created_at": user.date_joined.isoformat(),
            }

        stats = orders.aggregate(
            total_orders=Count("id"),
            total_spent=Sum("total"),
            average_order_value=Avg("total"),
            first_order_date=Min("created_at"),
            last_order_date=Max("created_at"),
        )
        for field in ("first_order_date", "last_order_date"):
            if stats[field] is not None:
                stats[field] = stats[field].isoformat()

        listed = orders.select_related("tracking").prefetch_related("items").order_by("-created_at")
        return render_page(request, "admin/customers/show", {
            "customer": customer,
            "orders": paginate(request, listed, 10, order_to_dict),
            "stats": stats,
        })
