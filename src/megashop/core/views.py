"""Core views for MegaShop."""

import logging

from django.contrib import messages
from django.contrib.auth import login, logout
from django.contrib.auth import views as auth_views
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied
from django.db import connection
from django.http import JsonResponse
from django.shortcuts import redirect
from django.urls import reverse
from django.utils.encoding import force_str
from django.utils.http import urlsafe_base64_decode
from django.views import View

from .forms import RegistrationForm
from .pages import PageView, form_errors, redirect_back_with_errors, render_page
from .verification import send_verification_email, verification_token_generator

logger = logging.getLogger(__name__)

VERIFICATION_STATUS_SESSION_KEY = "verification_status"


def health_check(request):
    """Health check endpoint for container orchestration."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return JsonResponse({"status": "healthy", "database": "connected"})
    except Exception as e:
        logger.exception("Health check failed")
        return JsonResponse(
            {"status": "unhealthy", "error": str(e)},
            status=503,
        )


class StaticPageView(PageView):
    """Content-only pages (about, contact, legal, cart, checkout)."""


class LoginView(auth_views.LoginView):
    """Email/password login rendered as a page component."""

    redirect_authenticated_user = True

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        data = kwargs.get("data")
        # The login page posts ``email``; AuthenticationForm expects ``username``
        if data is not None and "username" not in data and "email" in data:
            data = data.copy()
            data["username"] = data["email"]
            kwargs["data"] = data
        return kwargs

    def render_to_response(self, context, **response_kwargs):
        form = context.get("form")
        errors = {}
        if form is not None and form.is_bound and form.errors:
            errors = form_errors(form)
            if "__all__" in errors:
                errors["email"] = errors.pop("__all__")
        return render_page(
            self.request,
            "auth/login",
            {
                "errors": errors,
                "status": None,
                "can_reset_password": False,
            },
            status=response_kwargs.get("status", 200),
        )


class LogoutView(View):
    """Log out on POST and go back to the storefront."""

    def post(self, request):
        logout(request)
        return redirect("/")


class RegisterView(View):
    """Public sign-up."""

    def get(self, request):
        if request.user.is_authenticated:
            return redirect("store:dashboard")
        return render_page(request, "auth/register")

    def post(self, request):
        form = RegistrationForm(request.POST)
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/register/", data=request.POST
            )

        user = form.save()
        login(request, user, backend="megashop.core.backends.EmailBackend")
        logger.info("User registered", extra={"user_id": str(user.pk)})
        send_verification_email(request, user)
        messages.success(request, "Welcome to the store!")
        return redirect("store:dashboard")


# =============================================================================
# Email verification
# =============================================================================


def home_after_verification(user):
    """Where a verified user lands: the admin dashboard for admins."""
    if user.is_admin:
        return reverse("catalog:admin-dashboard")
    return reverse("store:dashboard")


class VerificationNoticeView(LoginRequiredMixin, View):
    """Ask the user to confirm their email; verified users move on."""

    login_url = "/accounts/login/"

    def get(self, request):
        if request.user.has_verified_email:
            return redirect(home_after_verification(request.user))
        return render_page(request, "auth/verify-email", {
            "status": request.session.pop(VERIFICATION_STATUS_SESSION_KEY, None),
        })


class VerificationSendView(LoginRequiredMixin, View):
    """Send a fresh verification link."""

    login_url = "/accounts/login/"

    def post(self, request):
        if request.user.has_verified_email:
            return redirect(home_after_verification(request.user))

        if send_verification_email(request, request.user):
            request.session[VERIFICATION_STATUS_SESSION_KEY] = "verification-link-sent"
        else:
            messages.error(request, "The verification email could not be sent. Please try again later.")
        return redirect("core:verification-notice")


class VerifyEmailView(LoginRequiredMixin, View):
    """Confirm the signed-in user's email from the link we mailed them."""

    login_url = "/accounts/login/"

    def get(self, request, uidb64, token):
        user = request.user
        try:
            uid = force_str(urlsafe_base64_decode(uidb64))
        except (TypeError, ValueError):
            raise PermissionDenied("Invalid verification link.")

        if uid != str(user.pk):
            raise PermissionDenied("Invalid verification link.")

        if not user.has_verified_email:
            if not verification_token_generator.check_token(user, token):
                raise PermissionDenied("Invalid or expired verification link.")
            user.mark_email_verified()
            logger.info("Email verified", extra={"user_id": str(user.pk)})

        return redirect(home_after_verification(user) + "?verified=1")
