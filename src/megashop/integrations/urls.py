"""Admin settings URL routes."""

from django.urls import path

from . import views

app_name = "integrations"

urlpatterns = [
    path("admin/settings/smtp/", views.MailSettingsView.as_view(), name="smtp"),
    path("admin/settings/smtp/update/", views.MailSettingsUpdateView.as_view(), name="smtp-update"),
    path("admin/settings/smtp/test/", views.MailTestView.as_view(), name="smtp-test"),
    path(
        "admin/settings/google-analytics/",
        views.GoogleAnalyticsSettingsView.as_view(),
        name="google-analytics",
    ),
    path(
        "admin/settings/google-analytics/update/",
        views.GoogleAnalyticsUpdateView.as_view(),
        name="google-analytics-update",
    ),
    path(
        "admin/settings/google-analytics/test/",
        views.GoogleAnalyticsTestView.as_view(),
        name="google-analytics-test",
    ),
    path(
        "admin/settings/facebook-pixel/",
        views.FacebookPixelSettingsView.as_view(),
        name="facebook-pixel",
    ),
    path(
        "admin/settings/facebook-pixel/update/",
        views.FacebookPixelUpdateView.as_view(),
        name="facebook-pixel-update",
    ),
    path(
        "admin/settings/facebook-pixel/test/",
        views.FacebookPixelTestView.as_view(),
        name="facebook-pixel-test",
    ),
]
