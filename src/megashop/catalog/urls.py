"""Catalog URL routes (public and admin)."""

from django.urls import path

from . import admin_views, views

app_name = "catalog"

urlpatterns = [
    # Public
    path("products/", views.ProductListView.as_view(), name="product-list"),
    path("products/<int:pk>/", views.ProductDetailView.as_view(), name="product-detail"),
    path("products/<int:pk>/reviews/", views.AddReviewView.as_view(), name="product-review"),
    path("categories/navigation/", views.category_navigation, name="category-navigation"),
    path("categories/<slug:slug>/", views.CategoryShowView.as_view(), name="category-show"),

    # Admin
    path("admin/", admin_views.AdminDashboardView.as_view(), name="admin-dashboard"),
    path("admin/categories/", admin_views.CategoryListView.as_view(), name="admin-category-list"),
    path("admin/categories/create/", admin_views.CategoryCreateView.as_view(), name="admin-category-create"),
    path("admin/categories/<int:pk>/edit/", admin_views.CategoryEditView.as_view(), name="admin-category-edit"),
    path("admin/categories/<int:pk>/update/", admin_views.CategoryUpdateView.as_view(), name="admin-category-update"),
    path("admin/categories/<int:pk>/delete/", admin_views.CategoryDeleteView.as_view(), name="admin-category-delete"),
    path("admin/products/", admin_views.ProductListView.as_view(), name="admin-product-list"),
    path("admin/products/create/", admin_views.ProductCreateView.as_view(), name="admin-product-create"),
    path("admin/products/export/", admin_views.ProductExportView.as_view(), name="admin-product-export"),
    path("admin/products/import/", admin_views.ProductImportView.as_view(), name="admin-product-import"),
    path("admin/products/<int:pk>/edit/", admin_views.ProductEditView.as_view(), name="admin-product-edit"),
    path("admin/products/<int:pk>/update/", admin_views.ProductUpdateView.as_view(), name="admin-product-update"),
    path("admin/products/<int:pk>/delete/", admin_views.ProductDeleteView.as_view(), name="admin-product-delete"),
]
