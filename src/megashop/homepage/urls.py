"""Homepage URL routes."""

from django.urls import path

from . import views

app_name = "homepage"

urlpatterns = [
    path("", views.HomepageView.as_view(), name="home"),
    path("admin/homepage/", views.SectionListView.as_view(), name="admin-section-list"),
    path("admin/homepage/sections/<int:pk>/edit/", views.SectionEditView.as_view(), name="admin-section-edit"),
    path("admin/homepage/sections/<int:pk>/update/", views.SectionUpdateView.as_view(), name="admin-section-update"),
    path(
        "admin/homepage/featured-products/",
        views.FeaturedProductListView.as_view(),
        name="admin-featured-list",
    ),
    path(
        "admin/homepage/featured-products/add/",
        views.FeaturedProductAddView.as_view(),
        name="admin-featured-add",
    ),
    path(
        "admin/homepage/featured-products/reorder/",
        views.FeaturedProductReorderView.as_view(),
        name="admin-featured-reorder",
    ),
    path(
        "admin/homepage/featured-products/<int:pk>/remove/",
        views.FeaturedProductRemoveView.as_view(),
        name="admin-featured-remove",
    ),
    path(
        "admin/homepage/featured-products/<int:pk>/toggle/",
        views.FeaturedProductToggleView.as_view(),
        name="admin-featured-toggle",
    ),
]
