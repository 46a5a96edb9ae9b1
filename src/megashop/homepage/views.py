"""Storefront homepage and its admin screens."""

import logging

from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect
from django.views import View

from megashop.catalog.models import Product
from megashop.catalog.serializers import product_to_dict
from megashop.core.mixins import AdminRequiredMixin
from megashop.core.pages import (
    form_errors,
    redirect_back,
    redirect_back_with_errors,
    render_page,
    request_data,
)

from . import services
from .exceptions import AlreadyFeaturedError
from .forms import FeaturedOrderForm, FeaturedProductForm, SectionForm
from .models import FeaturedProduct, HomepageSection
from .serializers import featured_to_dict, section_to_dict

logger = logging.getLogger(__name__)


class HomepageView(View):
    """Public landing page."""

    def get(self, request):
        sections = {}
        for section in HomepageSection.get_all_active():
            sections.setdefault(section.section_name, section)

        featured = [
            product_to_dict(entry.product)
            for entry in FeaturedProduct.get_all_active()
        ]
        all_products = Product.objects.prefetch_related("images").order_by("name")

        return render_page(request, "welcome", {
            "sections": {name: section_to_dict(s) for name, s in sections.items()},
            "featuredProducts": featured,
            "allProducts": [product_to_dict(p) for p in all_products],
            "defaultProductId": services.default_product_id(sections.get("order_form")),
        })


# =============================================================================
# Admin: sections
# =============================================================================


class SectionListView(AdminRequiredMixin, View):
    def get(self, request):
        sections = HomepageSection.objects.order_by("sort_order", "id")
        return render_page(request, "admin/homepage/index", {
            "sections": [section_to_dict(s) for s in sections],
        })


class SectionEditView(AdminRequiredMixin, View):
    def get(self, request, pk):
        section = get_object_or_404(HomepageSection, pk=pk)
        props = {"section": section_to_dict(section)}
        if section.section_name == "order_form":
            products = Product.objects.prefetch_related("images").order_by("name")
            props["products"] = [product_to_dict(p) for p in products]
            props["defaultProductId"] = services.default_product_id(section)
        return render_page(request, "admin/homepage/edit", props)


class SectionUpdateView(AdminRequiredMixin, View):
    def post(self, request, pk):
        section = get_object_or_404(HomepageSection, pk=pk)
        data = request_data(request)
        form = SectionForm(data, request.FILES)
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback=f"/admin/homepage/sections/{pk}/edit/"
            )

        services.update_section(section, form.changed_values(), image=form.cleaned_data.get("image"))
        messages.success(request, "Section updated successfully.")
        return redirect("homepage:admin-section-list")


# =============================================================================
# Admin: featured products
# =============================================================================


class FeaturedProductListView(AdminRequiredMixin, View):
    def get(self, request):
        featured = (
            FeaturedProduct.objects.select_related("product")
            .prefetch_related("product__images")
            .order_by("sort_order", "id")
        )
        available = (
            Product.objects.prefetch_related("images")
            .exclude(featured__isnull=False)
            .order_by("name")
        )
        return render_page(request, "admin/homepage/featured-products", {
            "featuredProducts": [featured_to_dict(f) for f in featured],
            "availableProducts": [product_to_dict(p) for p in available],
        })


class FeaturedProductAddView(AdminRequiredMixin, View):
    def post(self, request):
        form = FeaturedProductForm(request_data(request))
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/admin/homepage/featured-products/"
            )

        try:
            services.add_featured_product(
                form.cleaned_data["product_id"],
                sort_order=form.cleaned_data.get("sort_order"),
            )
        except AlreadyFeaturedError as e:
            messages.error(request, str(e))
            return redirect_back(request, "/admin/homepage/featured-products/")

        messages.success(request, "Product added to featured products.")
        return redirect_back(request, "/admin/homepage/featured-products/")


class FeaturedProductRemoveView(AdminRequiredMixin, View):
    def post(self, request, pk):
        get_object_or_404(FeaturedProduct, pk=pk).delete()
        messages.success(request, "Product removed from featured products.")
        return redirect_back(request, "/admin/homepage/featured-products/")


class FeaturedProductReorderView(AdminRequiredMixin, View):
    def post(self, request):
        form = FeaturedOrderForm(request_data(request))
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/admin/homepage/featured-products/"
            )

        services.reorder_featured_products(form.cleaned_data["products"])
        messages.success(request, "Product order updated.")
        return redirect_back(request, "/admin/homepage/featured-products/")


class FeaturedProductToggleView(AdminRequiredMixin, View):
    def post(self, request, pk):
        services.toggle_featured_product(get_object_or_404(FeaturedProduct, pk=pk))
        messages.success(request, "Product status updated.")
        return redirect_back(request, "/admin/homepage/featured-products/")
