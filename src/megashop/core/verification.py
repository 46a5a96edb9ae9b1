"""Email address verification links."""

import logging

from django.conf import settings
from django.contrib.auth.tokens import PasswordResetTokenGenerator
from django.core.mail import send_mail
from django.template.loader import render_to_string
from django.urls import reverse
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode

logger = logging.getLogger(__name__)


class EmailVerificationTokenGenerator(PasswordResetTokenGenerator):
    """Tokens bound to the user's current email and verification state.

    Changing the email or verifying invalidates outstanding links.
    Links expire after ``PASSWORD_RESET_TIMEOUT`` seconds.
    """

    key_salt = "megashop.core.verification.EmailVerificationTokenGenerator"

    def _make_hash_value(self, user, timestamp):
        verified = "" if user.email_verified_at is None else int(user.email_verified_at.timestamp())
        return f"{user.pk}{user.email}{verified}{timestamp}"


verification_token_generator = EmailVerificationTokenGenerator()


def verification_path(user):
    return reverse("core:verification-verify", kwargs={
        "uidb64": urlsafe_base64_encode(force_bytes(user.pk)),
        "token": verification_token_generator.make_token(user),
    })


def send_verification_email(request, user):
    """Mail ``user`` a link that confirms their address.

    Returns False when sending fails; the failure is logged.
    """
    context = {
        "user": user,
        "verify_url": request.build_absolute_uri(verification_path(user)),
        "store_name": settings.STORE_NAME,
    }
    try:
        send_mail(
            subject="Verify Email Address",
            message=render_to_string("emails/verify_email.txt", context),
            from_email=None,
            recipient_list=[user.email],
        )
    except Exception:
        logger.exception("Verification email failed", extra={"user_id": str(user.pk)})
        return False

    logger.info("Verification email sent", extra={"user_id": str(user.pk)})
    return True
