"""Admin settings pages: SMTP, Google Analytics and Facebook Pixel."""

import logging
import time

from django.contrib import messages
from django.core.mail import send_mail
from django.http import JsonResponse
from django.shortcuts import redirect
from django.views import View

from megashop.core.mixins import AdminRequiredMixin
from megashop.core.pages import (
    form_errors,
    redirect_back,
    redirect_back_with_errors,
    render_page,
    request_data,
)

from . import analytics
from .env import EnvService
from .forms import (
    FacebookPixelForm,
    GoogleAnalyticsForm,
    MailSettingsForm,
    TestEmailForm,
    TestEventForm,
)

logger = logging.getLogger(__name__)

MAIL_KEYS = [
    "MAIL_MAILER",
    "MAIL_HOST",
    "MAIL_PORT",
    "MAIL_USERNAME",
    "MAIL_PASSWORD",
    "MAIL_ENCRYPTION",
    "MAIL_FROM_ADDRESS",
    "MAIL_FROM_NAME",
]


# =============================================================================
# SMTP
# =============================================================================


class MailSettingsView(AdminRequiredMixin, View):
    def get(self, request):
        mail_settings = EnvService().get(MAIL_KEYS)
        mail_settings.setdefault("MAIL_ENCRYPTION", "tls")
        return render_page(request, "admin/settings/smtp", {"mailSettings": mail_settings})


class MailSettingsUpdateView(AdminRequiredMixin, View):
    def post(self, request):
        data = request_data(request)
        form = MailSettingsForm(data)
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/admin/settings/smtp/", data=data
            )

        EnvService().set(form.env_values())
        messages.success(request, "Mail settings updated successfully.")
        return redirect_back(request, "/admin/settings/smtp/")


class MailTestView(AdminRequiredMixin, View):
    def post(self, request):
        form = TestEmailForm(request_data(request))
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/admin/settings/smtp/"
            )

        try:
            send_mail(
                subject="Test Email from MegaShop",
                message="This is a test email from your application.",
                from_email=None,
                recipient_list=[form.cleaned_data["test_email"]],
            )
        except Exception as e:
            logger.exception("Test email failed", extra={"to": form.cleaned_data["test_email"]})
            messages.error(request, f"Failed to send test email: {e}")
            return redirect_back(request, "/admin/settings/smtp/")

        messages.success(request, "Test email sent successfully.")
        return redirect_back(request, "/admin/settings/smtp/")


# =============================================================================
# Analytics
# =============================================================================


def event_result_response(provider, send):
    """Run ``send()`` and turn its result into the JSON the settings page expects."""
    try:
        result = send()
    except Exception as e:
        logger.exception("%s test error", provider)
        return JsonResponse({"success": False, "message": f"An error occurred: {e}"}, status=500)

    if result["status"] == "success":
        return JsonResponse({
            "success": True,
            "message": f"Test event sent successfully to {provider}",
        })
    return JsonResponse({
        "success": False,
        "message": "Failed to send test event: {}".format(result.get("message", "Unknown error")),
    }, status=400)


class GoogleAnalyticsSettingsView(AdminRequiredMixin, View):
    def get(self, request):
        config = analytics.ga_config()
        return render_page(request, "admin/settings/google-analytics", {
            "gaSettings": {
                "GOOGLE_ANALYTICS_MEASUREMENT_ID": config["measurement_id"],
                "GOOGLE_ANALYTICS_API_SECRET": config["api_secret"],
                "GOOGLE_ANALYTICS_DEBUG_MODE": config["debug_mode"],
                "GOOGLE_ANALYTICS_ENABLED": config["enabled"],
            },
        })


class GoogleAnalyticsUpdateView(AdminRequiredMixin, View):
    def post(self, request):
        form = GoogleAnalyticsForm(request_data(request))
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/admin/settings/google-analytics/"
            )

        data = form.cleaned_data
        analytics.save_ga_config(
            measurement_id=data["GOOGLE_ANALYTICS_MEASUREMENT_ID"],
            api_secret=data["GOOGLE_ANALYTICS_API_SECRET"],
            debug_mode=data["GOOGLE_ANALYTICS_DEBUG_MODE"],
            enabled=data["GOOGLE_ANALYTICS_ENABLED"],
        )
        messages.success(request, "Google Analytics settings updated successfully")
        return redirect("integrations:google-analytics")


class GoogleAnalyticsTestView(AdminRequiredMixin, View):
    def post(self, request):
        form = TestEventForm(request_data(request))
        debug_mode = form.is_valid() and form.cleaned_data["debug_mode"]
        client_id = analytics.session_client_id(request)

        def send():
            overrides = {"debug_mode": True} if debug_mode else {}
            client = analytics.google_analytics(client_id=client_id, **overrides)
            return client.post_event("test_event", {
                "test_param": "test_value",
                "timestamp": int(time.time()),
            })

        return event_result_response("Google Analytics", send)


class FacebookPixelSettingsView(AdminRequiredMixin, View):
    def get(self, request):
        config = analytics.pixel_config()
        return render_page(request, "admin/settings/facebook-pixel", {
            "pixelSettings": {
                "FACEBOOK_PIXEL_ID": config["pixel_id"],
                "FACEBOOK_PIXEL_ACCESS_TOKEN": config["access_token"],
                "FACEBOOK_PIXEL_DEBUG_MODE": config["debug_mode"],
                "FACEBOOK_PIXEL_ENABLED": config["enabled"],
            },
        })


class FacebookPixelUpdateView(AdminRequiredMixin, View):
    def post(self, request):
        form = FacebookPixelForm(request_data(request))
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/admin/settings/facebook-pixel/"
            )

        data = form.cleaned_data
        analytics.save_pixel_config(
            pixel_id=data["FACEBOOK_PIXEL_ID"],
            access_token=data["FACEBOOK_PIXEL_ACCESS_TOKEN"],
            debug_mode=data["FACEBOOK_PIXEL_DEBUG_MODE"],
            enabled=data["FACEBOOK_PIXEL_ENABLED"],
        )
        messages.success(request, "Facebook Pixel settings updated successfully")
        return redirect("integrations:facebook-pixel")


class FacebookPixelTestView(AdminRequiredMixin, View):
    def post(self, request):
        form = TestEventForm(request_data(request))
        debug_mode = form.is_valid() and form.cleaned_data["debug_mode"]

        def send():
            overrides = {"debug_mode": True} if debug_mode else {}
            pixel = analytics.facebook_pixel(**overrides)
            return pixel.post_event(
                "TestEvent",
                {"test_param": "test_value"},
                source_url=request.build_absolute_uri("/"),
            )

        return event_result_response("Facebook Pixel", send)
