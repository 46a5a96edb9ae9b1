"""Tests for admin panel user management."""

import pytest
from django.contrib.auth import get_user_model
from django.test import Client
from django.urls import reverse

from megashop.conftest import PASSWORD

User = get_user_model()


@pytest.mark.django_db
class TestAdminAccess:
    def test_anonymous_is_sent_to_login(self):
        response = Client().get(reverse("core:admin-user-list"))

        assert response.status_code == 302
        assert response.url.startswith("/accounts/login/")

    def test_customer_gets_forbidden(self, customer_client):
        response = customer_client.get(reverse("core:admin-user-list"))

        assert response.status_code == 403

    def test_superuser_without_admin_role_is_allowed(self, db):
        superuser = User.objects.create_superuser(email="root@megashop.test", password=PASSWORD)
        superuser.role = User.Role.USER
        superuser.save()
        client = Client()
        client.force_login(superuser)

        assert client.get(reverse("core:admin-user-list")).status_code == 200


@pytest.mark.django_db
class TestUserListView:
    """Tests for GET /admin/users/"""

    def test_lists_users_paginated(self, admin_client, customer, inertia):
        props = admin_client.get(reverse("core:admin-user-list"), **inertia).json()["props"]

        assert props["users"]["total"] == 2
        assert props["users"]["per_page"] == 10

    def test_search_matches_name_or_email(self, admin_client, customer, other_customer, inertia):
        response = admin_client.get(reverse("core:admin-user-list"), {"search": "karim"}, **inertia)

        emails = [u["email"] for u in response.json()["props"]["users"]["data"]]
        assert emails == ["other@example.com"]

    def test_role_filter(self, admin_client, customer, inertia):
        response = admin_client.get(reverse("core:admin-user-list"), {"role": "admin"}, **inertia)

        emails = [u["email"] for u in response.json()["props"]["users"]["data"]]
        assert emails == ["admin@megashop.test"]

    def test_sort_by_email(self, admin_client, customer, other_customer, inertia):
        response = admin_client.get(reverse("core:admin-user-list"), {"sort": "email_desc"}, **inertia)

        emails = [u["email"] for u in response.json()["props"]["users"]["data"]]
        assert emails == ["other@example.com", "customer@example.com", "admin@megashop.test"]


@pytest.mark.django_db
class TestUserCrud:
    def test_create_user(self, admin_client):
        response = admin_client.post(reverse("core:admin-user-create"), {
            "name": "New Staff",
            "email": "staff@megashop.test",
            "password": PASSWORD,
            "password_confirmation": PASSWORD,
            "role": "admin",
        })

        assert response.status_code == 302
        user = User.objects.get(email="staff@megashop.test")
        assert user.is_admin
        assert user.is_staff
        assert user.check_password(PASSWORD)

    def test_create_requires_password(self, admin_client):
        admin_client.post(reverse("core:admin-user-create"), {
            "name": "No Password",
            "email": "nopass@megashop.test",
            "role": "user",
        })

        assert "password" in admin_client.session["errors"]
        assert not User.objects.filter(email="nopass@megashop.test").exists()

    def test_update_without_password_keeps_it(self, admin_client, customer):
        admin_client.post(reverse("core:admin-user-update", args=[customer.pk]), {
            "name": "Renamed",
            "email": "customer@example.com",
            "role": "user",
        })

        customer.refresh_from_db()
        assert customer.name == "Renamed"
        assert customer.check_password(PASSWORD)

    def test_update_rejects_email_of_another_user(self, admin_client, customer, other_customer):
        admin_client.post(reverse("core:admin-user-update", args=[customer.pk]), {
            "name": customer.name,
            "email": "other@example.com",
            "role": "user",
        })

        customer.refresh_from_db()
        assert customer.email == "customer@example.com"
        assert admin_client.session["errors"]["email"] == "The email has already been taken."

    def test_delete_user(self, admin_client, customer):
        response = admin_client.post(reverse("core:admin-user-delete", args=[customer.pk]))

        assert response.status_code == 302
        assert not User.objects.filter(pk=customer.pk).exists()

    def test_cannot_delete_self(self, admin_client, admin_user, inertia):
        admin_client.post(reverse("core:admin-user-delete", args=[admin_user.pk]))

        assert User.objects.filter(pk=admin_user.pk).exists()
        flash = admin_client.get(reverse("core:admin-user-list"), **inertia).json()["props"]["flash"]
        assert flash["error"] == "You cannot delete your own account."
