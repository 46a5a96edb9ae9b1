"""Public catalog views: product browsing, reviews and categories."""

from django.contrib import messages
from django.db.models import Prefetch, Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views import View

from megashop.core.pages import (
    form_errors,
    paginate,
    redirect_back,
    redirect_back_with_errors,
    render_page,
)

from .forms import ReviewForm
from .models import Category, Product
from .serializers import (
    category_option,
    category_to_dict,
    product_detail_to_dict,
    product_to_dict,
)
from .services import add_review

PRODUCT_SORTS = {
    "price_asc": "price",
    "price_desc": "-price",
    "name_asc": "name",
    "name_desc": "-name",
    "newest": "-created_at",
}
PRODUCTS_PER_PAGE = 12


def filtered_products(params):
    """Products filtered by ``category_id`` and ``search`` and sorted by ``sort``."""
    products = Product.objects.select_related("category").prefetch_related("images")

    category_id = params.get("category_id", "").strip()
    if category_id:
        if not category_id.isdigit():
            return Product.objects.none()
        products = products.filter(category_id=int(category_id))

    search = params.get("search", "").strip()
    if search:
        products = products.filter(Q(name__icontains=search) | Q(description__icontains=search))

    return products.order_by(PRODUCT_SORTS.get(params.get("sort"), "-created_at"), "-pk")


def product_filters(params):
    return {key: params.get(key, "") for key in ("search", "category_id", "sort")}


class ProductListView(View):
    component = "Products/Index"

    def get(self, request):
        products = filtered_products(request.GET)
        return render_page(request, self.component, {
            "products": paginate(request, products, PRODUCTS_PER_PAGE, product_to_dict),
            "categories": [category_option(c) for c in Category.objects.order_by("name")],
            "filters": product_filters(request.GET),
        })


class ProductDetailView(View):
    def get(self, request, pk):
        product = get_object_or_404(
            Product.objects.prefetch_related("images", "meta_tags"),
            pk=pk,
        )
        related = Product.objects.prefetch_related("images").exclude(pk=product.pk)
        if product.category_id:
            related = related.filter(category_id=product.category_id)

        return render_page(request, "Products/Show", {
            "product": product_detail_to_dict(product),
            "relatedProducts": [product_to_dict(p) for p in related[:4]],
        })


class AddReviewView(View):
    def post(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        form = ReviewForm(request.POST)
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback=f"/products/{pk}/", data=request.POST
            )

        add_review(product, form.cleaned_data, request.user)
        messages.success(request, "Review added successfully.")
        return redirect_back(request, f"/products/{pk}/")


class CategoryShowView(View):
    def get(self, request, slug):
        category = get_object_or_404(Category, slug=slug)
        products = category.products.prefetch_related("images").order_by("-created_at", "-pk")

        breadcrumb = {c.slug: c.name for c in category.ancestors()}
        breadcrumb[category.slug] = category.name

        data = category_to_dict(category)
        data["parent"] = category_option(category.parent) if category.parent else None
        data["children"] = [category_option(c) for c in category.children.all()]

        return render_page(request, "categories/show", {
            "category": data,
            "products": paginate(request, products, PRODUCTS_PER_PAGE, product_to_dict),
            "breadcrumb": breadcrumb,
        })


def category_navigation(request):
    """Active root categories with their active children, as JSON."""
    roots = (
        Category.objects.filter(is_active=True, parent__isnull=True)
        .prefetch_related(
            Prefetch(
                "children",
                queryset=Category.objects.filter(is_active=True).order_by("sort_order", "name"),
                to_attr="active_children",
            )
        )
        .order_by("sort_order", "name")
    )
    payload = []
    for root in roots:
        item = category_to_dict(root)
        item["children"] = [category_to_dict(child) for child in root.active_children]
        payload.append(item)
    return JsonResponse(payload, safe=False)
