"""URL configuration for MegaShop project."""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

from megashop.core.views import health_check

urlpatterns = [
    # Health check
    path("health/", health_check, name="health_check"),

    # Django admin (the store's own admin panel lives under /admin/)
    path("django-admin/", admin.site.urls),

    # Auth, static pages, admin user management
    path("", include("megashop.core.urls", namespace="core")),

    # Account settings
    path("settings/", RedirectView.as_view(url="/settings/profile/", permanent=False)),
    path("", include("megashop.profile.urls", namespace="profile")),

    # Storefront and admin panel
    path("", include("megashop.homepage.urls", namespace="homepage")),
    path("", include("megashop.catalog.urls", namespace="catalog")),
    path("", include("megashop.store.urls", namespace="store")),
    path("", include("megashop.integrations.urls", namespace="integrations")),
    path("", include("megashop.filemanager.urls", namespace="filemanager")),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
