"""Tests for email address verification."""

import re
from unittest import mock

import pytest
from django.contrib.auth import get_user_model
from django.test import Client
from django.urls import reverse

from megashop.conftest import PASSWORD
from megashop.core.verification import verification_path, verification_token_generator

User = get_user_model()


@pytest.fixture
def unverified(db):
    return User.objects.create_user(email="new@example.com", password=PASSWORD, name="Nadia Islam")


@pytest.fixture
def unverified_client(unverified):
    client = Client()
    client.force_login(unverified)
    return client


# =============================================================================
# Dashboard gate
# =============================================================================


@pytest.mark.django_db
class TestDashboardRequiresVerifiedEmail:
    def test_unverified_user_is_sent_to_notice(self, unverified_client):
        response = unverified_client.get(reverse("store:dashboard"))

        assert response.status_code == 302
        assert response["Location"] == reverse("core:verification-notice")

    def test_verified_user_sees_dashboard(self, customer_client):
        assert customer_client.get(reverse("store:dashboard")).status_code == 200

    def test_other_customer_pages_stay_open(self, unverified_client):
        assert unverified_client.get(reverse("store:user-order-list")).status_code == 200


# =============================================================================
# Notice and resend
# =============================================================================


@pytest.mark.django_db
class TestVerificationNotice:
    def test_notice_page(self, unverified_client, inertia):
        response = unverified_client.get(reverse("core:verification-notice"), **inertia)

        assert response.json()["component"] == "auth/verify-email"
        assert response.json()["props"]["status"] is None

    def test_verified_user_skips_notice(self, customer_client, admin_client):
        assert customer_client.get(reverse("core:verification-notice"))["Location"] == reverse("store:dashboard")
        assert admin_client.get(reverse("core:verification-notice"))["Location"] == reverse("catalog:admin-dashboard")

    def test_resend_mails_link_and_sets_status(self, unverified_client, unverified, mailoutbox, inertia):
        response = unverified_client.post(reverse("core:verification-send"))

        assert response["Location"] == reverse("core:verification-notice")
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == [unverified.email]
        assert "http://testserver/verify-email/" in mailoutbox[0].body
        props = unverified_client.get(reverse("core:verification-notice"), **inertia).json()["props"]
        assert props["status"] == "verification-link-sent"

    def test_resend_failure_is_flashed(self, unverified_client, inertia):
        with mock.patch("megashop.core.verification.send_mail", side_effect=OSError("smtp down")):
            unverified_client.post(reverse("core:verification-send"))

        props = unverified_client.get(reverse("core:verification-notice"), **inertia).json()["props"]
        assert props["flash"]["error"].startswith("The verification email could not be sent")
        assert props["status"] is None

    def test_registration_sends_link(self, client, mailoutbox):
        client.post(reverse("core:register"), {
            "name": "Fresh Customer",
            "email": "fresh@example.com",
            "password": PASSWORD,
            "password_confirmation": PASSWORD,
        })

        assert mailoutbox[0].subject == "Verify Email Address"
        assert mailoutbox[0].to == ["fresh@example.com"]
        assert User.objects.get(email="fresh@example.com").has_verified_email is False


# =============================================================================
# Verify link
# =============================================================================


@pytest.mark.django_db
class TestVerifyEmail:
    def test_link_marks_user_verified(self, unverified_client, unverified):
        response = unverified_client.get(verification_path(unverified))

        assert response["Location"] == reverse("store:dashboard") + "?verified=1"
        unverified.refresh_from_db()
        assert unverified.has_verified_email

    def test_mailed_link_works(self, unverified_client, unverified, mailoutbox):
        unverified_client.post(reverse("core:verification-send"))
        path = re.search(r"http://testserver(/verify-email/\S+)", mailoutbox[0].body).group(1)

        unverified_client.get(path)

        unverified.refresh_from_db()
        assert unverified.has_verified_email

    def test_bad_token_is_forbidden(self, unverified_client, unverified):
        path = verification_path(unverified).rsplit("/", 2)[0] + "/not-a-token/"

        assert unverified_client.get(path).status_code == 403
        unverified.refresh_from_db()
        assert not unverified.has_verified_email

    def test_link_for_another_user_is_forbidden(self, unverified_client, customer):
        customer.email_verified_at = None
        customer.save()

        assert unverified_client.get(verification_path(customer)).status_code == 403

    def test_changed_email_invalidates_link(self, unverified_client, unverified):
        path = verification_path(unverified)
        unverified.email = "changed@example.com"
        unverified.save()

        assert unverified_client.get(path).status_code == 403

    def test_requires_login(self, unverified):
        response = Client().get(verification_path(unverified))

        assert response["Location"].startswith("/accounts/login/")

    def test_already_verified_just_redirects(self, admin_client, admin_user):
        response = admin_client.get(verification_path(admin_user))

        assert response["Location"] == reverse("catalog:admin-dashboard") + "?verified=1"

    def test_token_does_not_survive_verification(self, unverified):
        token = verification_token_generator.make_token(unverified)
        unverified.mark_email_verified()

        assert not verification_token_generator.check_token(unverified, token)
        assert unverified.mark_email_verified() is False
