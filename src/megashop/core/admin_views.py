"""Admin panel user management."""

import logging

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.db.models import Q
from django.shortcuts import get_object_or_404, redirect
from django.views import View

from .forms import UserForm
from .mixins import AdminRequiredMixin
from .pages import (
    form_errors,
    paginate,
    redirect_back_with_errors,
    render_page,
)
from .serializers import user_to_dict

logger = logging.getLogger(__name__)

User = get_user_model()

USER_SORTS = {
    "name_asc": "name",
    "name_desc": "-name",
    "email_asc": "email",
    "email_desc": "-email",
    "newest": "-date_joined",
}


class UserListView(AdminRequiredMixin, View):
    """Searchable, filterable user list."""

    def get(self, request):
        search = request.GET.get("search", "").strip()
        role = request.GET.get("role", "")
        sort = request.GET.get("sort", "newest")

        users = User.objects.all()
        if search:
            users = users.filter(Q(name__icontains=search) | Q(email__icontains=search))
        if role in User.Role.values:
            users = users.filter(role=role)
        users = users.order_by(USER_SORTS.get(sort, "-date_joined"))

        return render_page(request, "admin/users/index", {
            "users": paginate(request, users, 10, user_to_dict),
            "filters": {"search": search, "role": role, "sort": sort},
            "roles": User.Role.values,
        })


class UserCreateView(AdminRequiredMixin, View):
    def get(self, request):
        return render_page(request, "admin/users/create", {"roles": User.Role.values})

    def post(self, request):
        form = UserForm(request.POST)
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback="/admin/users/create/", data=request.POST
            )

        user = form.save()
        logger.info("User created", extra={"user_id": str(user.pk), "by": str(request.user.pk)})
        messages.success(request, "User created successfully.")
        return redirect("core:admin-user-list")


class UserEditView(AdminRequiredMixin, View):
    def get(self, request, pk):
        user = get_object_or_404(User, pk=pk)
        return render_page(request, "admin/users/edit", {
            "user": user_to_dict(user),
            "roles": User.Role.values,
        })


class UserUpdateView(AdminRequiredMixin, View):
    def post(self, request, pk):
        user = get_object_or_404(User, pk=pk)
        form = UserForm(request.POST, instance=user)
        if not form.is_valid():
            return redirect_back_with_errors(
                request, form_errors(form), fallback=f"/admin/users/{pk}/edit/", data=request.POST
            )

        form.save()
        messages.success(request, "User updated successfully.")
        return redirect("core:admin-user-list")


class UserDeleteView(AdminRequiredMixin, View):
    def post(self, request, pk):
        user = get_object_or_404(User, pk=pk)
        if user.pk == request.user.pk:
            messages.error(request, "You cannot delete your own account.")
            return redirect("core:admin-user-list")

        user.delete()
        logger.info("User deleted", extra={"user_id": str(pk), "by": str(request.user.pk)})
        messages.success(request, "User deleted successfully.")
        return redirect("core:admin-user-list")
