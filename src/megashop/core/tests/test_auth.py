"""Tests for login, logout, registration and the shared page props."""

import pytest
from django.contrib.auth import get_user_model
from django.test import Client
from django.urls import reverse

from megashop.conftest import PASSWORD

User = get_user_model()


@pytest.fixture
def client():
    return Client()


# =============================================================================
# Login / Logout
# =============================================================================


@pytest.mark.django_db
class TestLoginView:
    """Tests for /accounts/login/"""

    def test_login_page_renders_component(self, client, inertia):
        response = client.get(reverse("core:login"), **inertia)

        assert response.status_code == 200
        assert response.json()["component"] == "auth/login"

    def test_login_with_email_redirects_to_dashboard(self, client, customer):
        response = client.post(
            reverse("core:login"),
            {"email": "customer@example.com", "password": PASSWORD},
        )

        assert response.status_code == 302
        assert response.url == "/dashboard/"

    def test_login_email_is_case_insensitive(self, client, customer):
        response = client.post(
            reverse("core:login"),
            {"email": "Customer@Example.COM", "password": PASSWORD},
        )

        assert response.status_code == 302

    def test_wrong_password_reports_error_on_email(self, client, customer, inertia):
        response = client.post(
            reverse("core:login"),
            {"email": "customer@example.com", "password": "wrong"},
            **inertia,
        )

        assert response.status_code == 200
        assert "email" in response.json()["props"]["errors"]

    def test_logout_ends_session(self, customer_client):
        response = customer_client.post(reverse("core:logout"))

        assert response.status_code == 302
        assert "_auth_user_id" not in customer_client.session


# =============================================================================
# Registration
# =============================================================================


@pytest.mark.django_db
class TestRegisterView:
    """Tests for /register/"""

    def test_registration_creates_user_with_user_role(self, client):
        response = client.post(reverse("core:register"), {
            "name": "Nadia Islam",
            "email": "nadia@example.com",
            "password": PASSWORD,
            "password_confirmation": PASSWORD,
        })

        assert response.status_code == 302
        assert response.url == reverse("store:dashboard")
        user = User.objects.get(email="nadia@example.com")
        assert user.role == User.Role.USER
        assert client.session["_auth_user_id"] == str(user.pk)

    def test_role_in_payload_is_ignored(self, client):
        client.post(reverse("core:register"), {
            "name": "Sneaky",
            "email": "sneaky@example.com",
            "password": PASSWORD,
            "password_confirmation": PASSWORD,
            "role": "admin",
        })

        assert User.objects.get(email="sneaky@example.com").role == User.Role.USER

    def test_duplicate_email_is_rejected(self, client, customer):
        response = client.post(reverse("core:register"), {
            "name": "Copy",
            "email": "customer@example.com",
            "password": PASSWORD,
            "password_confirmation": PASSWORD,
        })

        assert response.status_code == 302
        assert client.session["errors"]["email"] == "The email has already been taken."
        assert User.objects.filter(email="customer@example.com").count() == 1

    def test_password_confirmation_must_match(self, client):
        client.post(reverse("core:register"), {
            "name": "Typo",
            "email": "typo@example.com",
            "password": PASSWORD,
            "password_confirmation": PASSWORD + "x",
        })

        assert "password" in client.session["errors"]
        assert not User.objects.filter(email="typo@example.com").exists()

    def test_failed_input_is_kept_without_passwords(self, client, inertia):
        client.post(reverse("core:register"), {
            "name": "Typo",
            "email": "not-an-email",
            "password": PASSWORD,
            "password_confirmation": PASSWORD,
        })

        response = client.get(reverse("core:register"), **inertia)
        props = response.json()["props"]
        assert props["old"]["email"] == "not-an-email"
        assert "password" not in props["old"]
        assert "email" in props["errors"]


# =============================================================================
# Shared props and health
# =============================================================================


@pytest.mark.django_db
class TestSharedProps:
    def test_anonymous_auth_user_is_none(self, client, inertia):
        props = client.get(reverse("core:about"), **inertia).json()["props"]

        assert props["auth"]["user"] is None
        assert props["flash"] == {}
        assert props["errors"] == {}

    def test_signed_in_user_is_shared(self, admin_client, inertia):
        user = admin_client.get(reverse("core:about"), **inertia).json()["props"]["auth"]["user"]

        assert user["email"] == "admin@megashop.test"
        assert user["is_admin"] is True

    def test_full_page_load_embeds_page_object(self, client):
        response = client.get(reverse("core:contact"))

        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/html")
        assert b'"component": "contact"' in response.content

    @pytest.mark.parametrize("name,component", [
        ("core:about", "about"),
        ("core:privacy-policy", "privacy-policy"),
        ("core:terms-of-service", "terms-of-service"),
        ("core:cart", "cart"),
        ("core:checkout", "checkout"),
    ])
    def test_static_pages(self, client, inertia, name, component):
        response = client.get(reverse(name), **inertia)

        assert response.json()["component"] == component


@pytest.mark.django_db
def test_health_check_reports_database():
    response = Client().get("/health/")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected"}
