"""Tests for self-service profile and password settings."""

import pytest
from django.contrib.auth import get_user_model
from django.test import Client
from django.urls import reverse

from megashop.conftest import PASSWORD

User = get_user_model()


@pytest.mark.django_db
class TestProfile:
    def test_requires_login(self, db):
        response = Client().get(reverse("profile:view"))

        assert response.status_code == 302
        assert response["Location"].startswith("/accounts/login/")

    def test_page_props(self, customer_client, inertia):
        response = customer_client.get(reverse("profile:view"), **inertia)

        assert response.json()["component"] == "settings/profile"
        assert response.json()["props"]["profile"] == {"name": "Rahim Uddin", "email": "customer@example.com"}

    def test_settings_root_redirects_to_profile(self, customer_client):
        response = customer_client.get("/settings/")

        assert response["Location"] == "/settings/profile/"

    def test_update(self, customer_client, customer):
        response = customer_client.post(reverse("profile:update"), {
            "name": "Rahim U.",
            "email": "Rahim@Example.com",
        })

        assert response["Location"] == reverse("profile:view")
        customer.refresh_from_db()
        assert customer.name == "Rahim U."
        assert customer.email == "rahim@example.com"
        assert customer.email_verified_at is None

    def test_keeping_own_email_is_allowed(self, customer_client, customer):
        customer_client.post(reverse("profile:update"), {"name": "New Name", "email": customer.email})

        customer.refresh_from_db()
        assert customer.name == "New Name"
        assert customer.has_verified_email

    def test_email_taken_by_someone_else(self, customer_client, customer, other_customer):
        customer_client.post(reverse("profile:update"), {
            "name": "Rahim Uddin",
            "email": other_customer.email.upper(),
        })

        assert customer_client.session["errors"]["email"] == "The email has already been taken."
        customer.refresh_from_db()
        assert customer.email == "customer@example.com"


@pytest.mark.django_db
class TestDeleteAccount:
    def test_wrong_password_keeps_account(self, customer_client, customer):
        customer_client.post(reverse("profile:delete"), {"password": "wrong"})

        assert User.objects.filter(pk=customer.pk).exists()
        assert customer_client.session["errors"]["password"] == "The password is incorrect."

    def test_delete_logs_out(self, customer_client, customer):
        response = customer_client.post(reverse("profile:delete"), {"password": PASSWORD})

        assert response["Location"] == "/"
        assert not User.objects.filter(pk=customer.pk).exists()
        assert "_auth_user_id" not in customer_client.session


@pytest.mark.django_db
class TestPassword:
    def test_change_keeps_session(self, customer_client, customer, inertia):
        response = customer_client.post(reverse("profile:password-update"), {
            "current_password": PASSWORD,
            "password": "Brand-new-pass-77",
            "password_confirmation": "Brand-new-pass-77",
        })

        assert response["Location"] == reverse("profile:password")
        customer.refresh_from_db()
        assert customer.check_password("Brand-new-pass-77")
        page = customer_client.get(reverse("profile:password"), **inertia)
        assert page.status_code == 200
        assert page.json()["props"]["flash"]["success"] == "Password changed successfully."

    def test_errors_use_page_field_names(self, customer_client, customer):
        customer_client.post(reverse("profile:password-update"), {
            "current_password": "wrong",
            "password": "Brand-new-pass-77",
            "password_confirmation": "Different-pass-77",
        })

        errors = customer_client.session["errors"]
        assert "current_password" in errors
        assert "password_confirmation" in errors
        customer.refresh_from_db()
        assert customer.check_password(PASSWORD)
