"""URL routes for auth, static pages and admin user management."""

from django.urls import path

from . import admin_views, views

app_name = "core"

urlpatterns = [
    # Auth
    path("accounts/login/", views.LoginView.as_view(), name="login"),
    path("accounts/logout/", views.LogoutView.as_view(), name="logout"),
    path("register/", views.RegisterView.as_view(), name="register"),
    path("verify-email/", views.VerificationNoticeView.as_view(), name="verification-notice"),
    path(
        "verify-email/<str:uidb64>/<str:token>/",
        views.VerifyEmailView.as_view(),
        name="verification-verify",
    ),
    path(
        "email/verification-notification/",
        views.VerificationSendView.as_view(),
        name="verification-send",
    ),

    # Static pages
    path("about/", views.StaticPageView.as_view(component="about"), name="about"),
    path("contact/", views.StaticPageView.as_view(component="contact"), name="contact"),
    path("privacy-policy/", views.StaticPageView.as_view(component="privacy-policy"), name="privacy-policy"),
    path(
        "terms-of-service/",
        views.StaticPageView.as_view(component="terms-of-service"),
        name="terms-of-service",
    ),
    path("cart/", views.StaticPageView.as_view(component="cart"), name="cart"),
    path("checkout/", views.StaticPageView.as_view(component="checkout"), name="checkout"),

    # Admin users
    path("admin/users/", admin_views.UserListView.as_view(), name="admin-user-list"),
    path("admin/users/create/", admin_views.UserCreateView.as_view(), name="admin-user-create"),
    path("admin/users/<uuid:pk>/edit/", admin_views.UserEditView.as_view(), name="admin-user-edit"),
    path("admin/users/<uuid:pk>/update/", admin_views.UserUpdateView.as_view(), name="admin-user-update"),
    path("admin/users/<uuid:pk>/delete/", admin_views.UserDeleteView.as_view(), name="admin-user-delete"),
]
