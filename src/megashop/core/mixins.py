"""Core mixins for view access control."""

from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.shortcuts import redirect


class AdminRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    """Mixin for admin panel views.

    Anonymous users are sent to the login page; signed-in users without
    the admin role get a 403.
    """

    login_url = "/accounts/login/"

    def test_func(self):
        user = self.request.user

        # Superusers always have access
        if user.is_superuser:
            return True

        return getattr(user, "is_admin", False)


class CustomerRequiredMixin(LoginRequiredMixin):
    """Authenticated customer access."""

    login_url = "/accounts/login/"
    redirect_field_name = "next"


class VerifiedEmailRequiredMixin(CustomerRequiredMixin):
    """Signed-in users whose email address is confirmed.

    Unverified users are sent to the verification notice.
    """

    def dispatch(self, request, *args, **kwargs):
        user = request.user
        if user.is_authenticated and not user.has_verified_email:
            return redirect("core:verification-notice")
        return super().dispatch(request, *args, **kwargs)
