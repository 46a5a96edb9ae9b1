"""Storefront order views: checkout, order history, dashboard and wishlist."""

import logging

from django.contrib import messages
from django.core.exceptions import PermissionDenied
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect
from django.views import View

from megashop.catalog.models import Product
from megashop.catalog.serializers import image_to_dict, product_to_dict
from megashop.core.mixins import CustomerRequiredMixin, VerifiedEmailRequiredMixin
from megashop.core.pages import (
    form_errors,
    paginate,
    redirect_back_with_errors,
    render_page,
    request_data,
)

from .exceptions import InsufficientStockError, ProductUnavailableError
from .forms import CheckoutForm
from .models import Order, Wishlist
from .serializers import order_to_dict
from .services import place_order

logger = logging.getLogger(__name__)


class CheckoutView(View):
    """Place an order from the cart (guest or signed in)."""

    def post(self, request):
        data = request_data(request)
        form = CheckoutForm(data)
        if not form.is_valid():
            return redirect_back_with_errors(request, form_errors(form), fallback="/checkout/", data=data)

        try:
            order = place_order(form.cleaned_data, request.user)
        except InsufficientStockError as e:
            return redirect_back_with_errors(request, {"stock": str(e)}, fallback="/checkout/", data=data)
        except ProductUnavailableError as e:
            return redirect_back_with_errors(request, {"items": str(e)}, fallback="/checkout/", data=data)

        messages.success(request, "Order placed successfully!")
        return redirect("store:order-success", pk=order.pk)


class OrderSuccessView(View):
    def get(self, request, pk):
        order = get_object_or_404(Order.objects.prefetch_related("items"), pk=pk)
        if request.user.is_authenticated and order.user_id != request.user.pk:
            raise PermissionDenied
        return render_page(request, "Orders/Success", {"order": order_to_dict(order)})


class DashboardView(VerifiedEmailRequiredMixin, View):
    """Customer dashboard: recent orders and the newest products."""

    def get(self, request):
        recent_orders = (
            Order.objects.filter(user=request.user)
            .select_related("tracking")
            .prefetch_related("items")
            .order_by("-created_at")[:5]
        )
        products = (
            Product.objects.select_related("category")
            .prefetch_related("images")
            .order_by("-created_at", "-pk")[:4]
        )
        return render_page(request, "dashboard", {
            "recentOrders": [order_to_dict(o) for o in recent_orders],
            "recentlyViewedProducts": [product_to_dict(p) for p in products],
        })


class UserOrderListView(CustomerRequiredMixin, View):
    def get(self, request):
        orders = Order.objects.filter(user=request.user).prefetch_related("items").order_by("-created_at")
        return render_page(request, "Orders/Index", {
            "orders": paginate(request, orders, 10, order_to_dict),
        })


class UserOrderDetailView(CustomerRequiredMixin, View):
    def get(self, request, pk):
        order = get_object_or_404(
            Order.objects.select_related("tracking").prefetch_related("items"),
            pk=pk,
            user=request.user,
        )
        return render_page(request, "Orders/Show", {"order": order_to_dict(order)})


# =============================================================================
# Wishlist
# =============================================================================


def _wishlist_product(request):
    """Resolve ``product_id`` from the payload; returns (product, error response)."""
    product_id = request_data(request).get("product_id")
    product = None
    if product_id not in (None, "") and str(product_id).isdigit():
        product = Product.objects.filter(pk=int(product_id)).first()
    if product is None:
        return None, JsonResponse(
            {"message": "The selected product id is invalid.", "errors": {"product_id": "The selected product id is invalid."}},
            status=422,
        )
    return product, None


class WishlistView(CustomerRequiredMixin, View):
    def get(self, request):
        entries = (
            Wishlist.objects.filter(user=request.user)
            .select_related("product")
            .prefetch_related("product__images")
        )
        items = []
        for entry in entries:
            product = entry.product
            data = product_to_dict(product)
            items.append({
                "id": entry.pk,
                "product_id": product.pk,
                "name": product.name,
                "price": product.price,
                "description": product.description,
                "main_image": data["main_image"],
                "main_image_url": data["main_image_url"],
                "images": [image_to_dict(image) for image in product.images.all()],
                "created_at": entry.created_at.isoformat(),
            })
        return render_page(request, "Wishlist/Index", {"wishlistItems": items})


class WishlistAddView(CustomerRequiredMixin, View):
    def post(self, request):
        product, error = _wishlist_product(request)
        if error:
            return error
        entry, _ = Wishlist.objects.get_or_create(user=request.user, product=product)
        return JsonResponse({
            "success": True,
            "message": "Product added to wishlist",
            "wishlist_id": entry.pk,
        })


class WishlistRemoveView(CustomerRequiredMixin, View):
    def post(self, request):
        product, error = _wishlist_product(request)
        if error:
            return error
        deleted, _ = Wishlist.objects.filter(user=request.user, product=product).delete()
        return JsonResponse({
            "success": deleted > 0,
            "message": "Product removed from wishlist" if deleted else "Product not found in wishlist",
        })

    def delete(self, request):
        return self.post(request)


class WishlistCheckView(CustomerRequiredMixin, View):
    def get(self, request):
        product_id = request.GET.get("product_id", "")
        exists = product_id.isdigit() and Wishlist.objects.filter(
            user=request.user, product_id=int(product_id)
        ).exists()
        return JsonResponse({"in_wishlist": bool(exists)})
