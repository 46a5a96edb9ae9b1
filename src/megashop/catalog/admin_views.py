"""Admin panel views for categories, products and the product CSV."""

import logging

from django.contrib import messages
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect
from django.utils import timezone
from django.views import View

from megashop.core.mixins import AdminRequiredMixin
from megashop.core.pages import (
    form_errors,
    get_list,
    paginate,
    redirect_back,
    redirect_back_with_errors,
    render_page,
)
from megashop.core.uploads import image_upload_errors

from . import services
from .csv_io import export_products, import_products
from .exceptions import CategoryInUseError, CircularCategoryError, CsvImportError
from .forms import CategoryForm, CsvUploadForm, ProductForm
from .models import Category, Product
from .serializers import (
    category_option,
    category_to_dict,
    image_to_dict,
    product_to_dict,
)
from .views import PRODUCTS_PER_PAGE, filtered_products, product_filters

logger = logging.getLogger(__name__)


class AdminDashboardView(AdminRequiredMixin, View):
    def get(self, request):
        recent = Product.objects.prefetch_related("images").order_by("-created_at", "-pk")[:3]
        return render_page(request, "admin/dashboard", {
            "recentProducts": [product_to_dict(p) for p in recent],
            "productCount": Product.objects.count(),
        })


# =============================================================================
# Categories
# =============================================================================


def parent_options(queryset):
    return [
        {"id": c.pk, "name": c.name, "parent_id": c.parent_id}
        for c in queryset.order_by("name")
    ]


class CategoryListView(AdminRequiredMixin, View):
    def get(self, request):
        categories = []
        for category in Category.objects.select_related("parent").order_by("sort_order", "name"):
            data = category_to_dict(category)
            data.update({
                "parent_name": category.parent.name if category.parent else None,
                "path": category.path,
                "product_count": category.products.count(),
                "created_at": category.created_at.isoformat(),
            })
            categories.append(data)
        return render_page(request, "admin/categories/index", {"categories": categories})


class CategoryCreateView(AdminRequiredMixin, View):
    def get(self, request):
        return render_page(request, "admin/categories/create", {
            "parentCategories": parent_options(Category.objects.all()),
        })

    def post(self, request):
        form = CategoryForm(request.POST, request.FILES)
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/admin/categories/create/", data=request.POST
            )

        services.create_category(form.cleaned_data, image=form.cleaned_data.get("image"))
        messages.success(request, "Category created successfully.")
        return redirect("catalog:admin-category-list")


class CategoryEditView(AdminRequiredMixin, View):
    def get(self, request, pk):
        category = get_object_or_404(Category, pk=pk)
        excluded = [category.pk] + [c.pk for c in category.descendants()]
        return render_page(request, "admin/categories/edit", {
            "category": category_to_dict(category),
            "parentCategories": parent_options(Category.objects.exclude(pk__in=excluded)),
        })


class CategoryUpdateView(AdminRequiredMixin, View):
    def post(self, request, pk):
        category = get_object_or_404(Category, pk=pk)
        fallback = f"/admin/categories/{pk}/edit/"
        form = CategoryForm(request.POST, request.FILES, instance=category)
        if not form.is_valid():
            return redirect_back_with_errors(request, form_errors(form), fallback, data=request.POST)

        try:
            services.update_category(category, form.cleaned_data, image=form.cleaned_data.get("image"))
        except CircularCategoryError as e:
            return redirect_back_with_errors(request, {"parent_id": str(e)}, fallback, data=request.POST)

        messages.success(request, "Category updated successfully.")
        return redirect("catalog:admin-category-list")


class CategoryDeleteView(AdminRequiredMixin, View):
    def post(self, request, pk):
        category = get_object_or_404(Category, pk=pk)
        try:
            services.delete_category(category)
        except CategoryInUseError as e:
            messages.error(request, str(e))
            return redirect_back(request, "/admin/categories/")

        messages.success(request, "Category deleted successfully.")
        return redirect("catalog:admin-category-list")


# =============================================================================
# Products
# =============================================================================


class ProductListView(AdminRequiredMixin, View):
    def get(self, request):
        return render_page(request, "admin/products/index", {
            "products": paginate(request, filtered_products(request.GET), PRODUCTS_PER_PAGE, product_to_dict),
            "categories": [category_option(c) for c in Category.objects.order_by("name")],
            "filters": product_filters(request.GET),
        })


class ProductCreateView(AdminRequiredMixin, View):
    def get(self, request):
        return render_page(request, "admin/products/create", {
            "categories": [category_option(c) for c in Category.objects.order_by("name")],
        })

    def post(self, request):
        fallback = "/admin/products/create/"
        form = ProductForm(request.POST)
        images = request.FILES.getlist("images")
        if not form.is_valid():
            return redirect_back_with_errors(request, form_errors(form), fallback, data=request.POST)
        errors = image_upload_errors(images)
        if errors:
            return redirect_back_with_errors(request, errors, fallback, data=request.POST)

        services.create_product(form.cleaned_data, images)
        messages.success(request, "Product created successfully.")
        return redirect("catalog:admin-product-list")


class ProductEditView(AdminRequiredMixin, View):
    def get(self, request, pk):
        product = get_object_or_404(Product.objects.prefetch_related("images", "meta_tags"), pk=pk)
        data = product_to_dict(product)
        data["images"] = [image_to_dict(image) for image in product.images.all()]
        data["meta_tags"] = ", ".join(tag.tag for tag in product.meta_tags.all())
        return render_page(request, "admin/products/edit", {
            "product": data,
            "categories": [category_option(c) for c in Category.objects.order_by("name")],
        })


class ProductUpdateView(AdminRequiredMixin, View):
    def post(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        fallback = f"/admin/products/{pk}/edit/"
        form = ProductForm(request.POST)
        images = request.FILES.getlist("images")
        if not form.is_valid():
            return redirect_back_with_errors(request, form_errors(form), fallback, data=request.POST)
        errors = image_upload_errors(images)
        if errors:
            logger.warning("Product image validation failed", extra={"product_id": pk, "errors": errors})
            return redirect_back_with_errors(request, errors, fallback, data=request.POST)

        services.update_product(
            product,
            form.cleaned_data,
            images=images,
            remove_image_ids=get_list(request.POST, "remove_images"),
        )
        messages.success(request, "Product updated successfully.")
        return redirect("catalog:admin-product-list")


class ProductDeleteView(AdminRequiredMixin, View):
    def post(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        services.delete_product(product)
        messages.success(request, "Product deleted successfully.")
        return redirect("catalog:admin-product-list")


class ProductExportView(AdminRequiredMixin, View):
    def get(self, request):
        filename = f"products-{timezone.localdate():%Y-%m-%d}.csv"
        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        count = export_products(response)
        logger.info("Products exported", extra={"count": count})
        return response


class ProductImportView(AdminRequiredMixin, View):
    def post(self, request):
        form = CsvUploadForm(request.POST, request.FILES)
        if not form.is_valid():
            return redirect_back_with_errors(request, form_errors(form), fallback="/admin/products/")

        try:
            stats = import_products(form.cleaned_data["csv_file"])
        except CsvImportError as e:
            messages.error(request, f"Import failed: {e}")
            return redirect_back(request, "/admin/products/")

        messages.success(
            request,
            "Import finished: {total} rows, {created} created, {updated} updated, {errors} errors.".format(**stats),
        )
        return redirect("catalog:admin-product-list")
