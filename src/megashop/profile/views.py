"""Self-service account settings for signed-in users."""

import logging

from django.contrib import messages
from django.contrib.auth import logout, update_session_auth_hash
from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import redirect
from django.views import View

from megashop.core.pages import (
    form_errors,
    redirect_back_with_errors,
    render_page,
    request_data,
)

from .forms import DeleteAccountForm, PasswordUpdateForm, ProfileForm

logger = logging.getLogger(__name__)


class ProfileView(LoginRequiredMixin, View):
    """Profile page showing the user's name and email."""

    login_url = "/accounts/login/"

    def get(self, request):
        user = request.user
        return render_page(request, "settings/profile", {
            "profile": {"name": user.name, "email": user.email},
        })


class ProfileUpdateView(LoginRequiredMixin, View):
    login_url = "/accounts/login/"

    def post(self, request):
        data = request_data(request)
        form = ProfileForm(data, user=request.user)
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/settings/profile/", data=data
            )

        form.save()
        messages.success(request, "Profile updated successfully.")
        return redirect("profile:view")


class ProfileDeleteView(LoginRequiredMixin, View):
    """Delete the signed-in account after confirming the password."""

    login_url = "/accounts/login/"

    def post(self, request):
        user = request.user
        form = DeleteAccountForm(request_data(request), user=user)
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/settings/profile/"
            )

        user_id = user.pk
        logout(request)
        user.delete()
        logger.info("Account deleted by its owner", extra={"user_id": str(user_id)})
        return redirect("/")


class PasswordView(LoginRequiredMixin, View):
    login_url = "/accounts/login/"

    def get(self, request):
        return render_page(request, "settings/password")


class PasswordUpdateView(LoginRequiredMixin, View):
    """Change password; the current session stays signed in."""

    login_url = "/accounts/login/"

    def post(self, request):
        form = PasswordUpdateForm(request.user, request_data(request))
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form.aliased_errors(), fallback="/settings/password/"
            )

        user = form.save()
        update_session_auth_hash(request, user)
        messages.success(request, "Password changed successfully.")
        return redirect("profile:password")
