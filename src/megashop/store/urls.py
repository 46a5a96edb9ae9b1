"""Store URL routes (storefront orders, wishlist and admin)."""

from django.urls import path

from . import admin_views, customers, reports, views

app_name = "store"

urlpatterns = [
    # Checkout and customer orders
    path("orders/", views.CheckoutView.as_view(), name="checkout"),
    path("orders/<int:pk>/success/", views.OrderSuccessView.as_view(), name="order-success"),
    path("dashboard/", views.DashboardView.as_view(), name="dashboard"),
    path("my-orders/", views.UserOrderListView.as_view(), name="user-order-list"),
    path("my-orders/<int:pk>/", views.UserOrderDetailView.as_view(), name="user-order-detail"),

    # Wishlist
    path("wishlist/", views.WishlistView.as_view(), name="wishlist"),
    path("wishlist/add/", views.WishlistAddView.as_view(), name="wishlist-add"),
    path("wishlist/remove/", views.WishlistRemoveView.as_view(), name="wishlist-remove"),
    path("wishlist/check/", views.WishlistCheckView.as_view(), name="wishlist-check"),

    # Admin orders
    path("admin/orders/", admin_views.OrderListView.as_view(), name="admin-order-list"),
    path("admin/orders/export/", admin_views.OrderExportView.as_view(), name="admin-order-export"),
    path("admin/orders/import/", admin_views.OrderImportView.as_view(), name="admin-order-import"),
    path("admin/orders/<int:pk>/", admin_views.OrderDetailView.as_view(), name="admin-order-detail"),
    path("admin/orders/<int:pk>/status/", admin_views.OrderStatusUpdateView.as_view(), name="admin-order-status"),
    path("admin/orders/<int:pk>/tracking/", admin_views.OrderTrackingUpdateView.as_view(), name="admin-order-tracking"),

    # Admin customers and reports
    path("admin/customers/", customers.CustomerListView.as_view(), name="admin-customer-list"),
    path("admin/customers/<str:key>/", customers.CustomerDetailView.as_view(), name="admin-customer-detail"),
    path("admin/reports/", reports.ReportView.as_view(), name="admin-reports"),
]
