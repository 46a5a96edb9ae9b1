"""Admin panel order management."""

import logging

from django.contrib import messages
from django.db.models import Q
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.views import View

from megashop.core.mixins import AdminRequiredMixin
from megashop.core.pages import (
    form_errors,
    paginate,
    redirect_back,
    redirect_back_with_errors,
    render_page,
)

from . import services
from .csv_io import export_orders, filtered_orders, import_orders
from .exceptions import OrderImportError
from .forms import OrderExportForm, OrderImportForm, StatusForm, TrackingForm
from .models import Order, OrderStatus
from .serializers import order_to_dict

logger = logging.getLogger(__name__)

ORDERS_PER_PAGE = 15


class OrderListView(AdminRequiredMixin, View):
    def get(self, request):
        status = request.GET.get("status", "")
        search = request.GET.get("search", "").strip()

        orders = Order.objects.select_related("tracking").prefetch_related("items").order_by("-created_at")
        if status and status != "all":
            orders = orders.filter(status=status)
        if search:
            orders = orders.filter(
                Q(name__icontains=search) | Q(email__icontains=search) | Q(mobile__icontains=search)
            )

        return render_page(request, "admin/orders/index", {
            "orders": paginate(request, orders, ORDERS_PER_PAGE, order_to_dict),
            "filters": {"status": status, "search": search},
            "statuses": OrderStatus.values,
        })


class OrderDetailView(AdminRequiredMixin, View):
    def get(self, request, pk):
        order = get_object_or_404(
            Order.objects.select_related("tracking", "user").prefetch_related("items__product"),
            pk=pk,
        )
        data = order_to_dict(order)
        data["user"] = (
            {"id": str(order.user.pk), "name": order.user.name, "email": order.user.email}
            if order.user
            else None
        )
        return render_page(request, "admin/orders/show", {
            "order": data,
            "statuses": OrderStatus.values,
        })


class OrderStatusUpdateView(AdminRequiredMixin, View):
    def post(self, request, pk):
        order = get_object_or_404(Order, pk=pk)
        form = StatusForm(request.POST)
        if not form.is_valid():
            return redirect_back_with_errors(request, form_errors(form), fallback=f"/admin/orders/{pk}/")

        services.update_status(order, form.cleaned_data["status"])
        messages.success(request, "Order status updated successfully.")
        return redirect_back(request, f"/admin/orders/{pk}/")


class OrderTrackingUpdateView(AdminRequiredMixin, View):
    def post(self, request, pk):
        order = get_object_or_404(Order, pk=pk)
        form = TrackingForm(request.POST)
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback=f"/admin/orders/{pk}/", data=request.POST
            )

        services.update_tracking(order, form.cleaned_data)
        messages.success(request, "Order tracking information updated successfully.")
        return redirect_back(request, f"/admin/orders/{pk}/")


class OrderExportView(AdminRequiredMixin, View):
    def get(self, request):
        form = OrderExportForm(request.GET)
        if not form.is_valid():
            return redirect_back_with_errors(request, form_errors(form), fallback="/admin/orders/")

        orders = filtered_orders(
            status=form.cleaned_data.get("status"),
            start_date=form.cleaned_data.get("start_date"),
            end_date=form.cleaned_data.get("end_date"),
        )
        filename = f"orders_export_{timezone.localtime():%Y-%m-%d_%H%M%S}.csv"
        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        response["Cache-Control"] = "no-cache, no-store, must-revalidate"
        rows = export_orders(response, orders)
        logger.info("Orders exported", extra={"rows": rows})
        return response


class OrderImportView(AdminRequiredMixin, View):
    def post(self, request):
        form = OrderImportForm(request.POST, request.FILES)
        if not form.is_valid():
            return redirect_back_with_errors(request, form_errors(form), fallback="/admin/orders/")

        try:
            stats = import_orders(
                form.cleaned_data["csv_file"],
                skip_existing=form.cleaned_data["skip_existing"],
            )
        except OrderImportError as e:
            messages.error(request, str(e))
            return redirect_back(request, "/admin/orders/")

        if stats["created"] == 0 and stats["skipped"] > 0:
            messages.warning(
                request,
                f"All orders already exist in the database. {stats['skipped']} orders were skipped.",
            )
        else:
            summary = f"Import completed successfully! Created: {stats['created']}, Skipped: {stats['skipped']}"
            if stats["errors"]:
                summary += f", Errors: {stats['errors']}"
            messages.success(request, summary)
        return redirect_back(request, "/admin/orders/")
