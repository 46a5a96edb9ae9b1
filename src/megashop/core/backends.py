"""Custom authentication backends."""

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class EmailBackend(ModelBackend):
    """Authentication backend that allows login with email."""

    def authenticate(self, request, username=None, password=None, **kwargs):
        User = get_user_model()

        email = username or kwargs.get("email")
        if not email or password is None:
            return None

        # Email addresses are matched case-insensitively
        try:
            user = User.objects.get(email__iexact=email.strip())
        except User.DoesNotExist:
            # Run the hasher anyway so timing does not reveal unknown emails
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
