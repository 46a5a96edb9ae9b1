"""Forms for self-service account settings."""

from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.forms import PasswordChangeForm

User = get_user_model()


class ProfileForm(forms.Form):
    name = forms.CharField(max_length=255)
    email = forms.EmailField(max_length=255)

    def __init__(self, *args, user, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean_email(self):
        email = self.cleaned_data["email"].strip().lower()
        if User.objects.filter(email__iexact=email).exclude(pk=self.user.pk).exists():
            raise forms.ValidationError("The email has already been taken.")
        return email

    def save(self):
        """Save name and email; a new email address needs verifying again."""
        if self.cleaned_data["email"] != self.user.email.lower():
            self.user.email_verified_at = None
        self.user.name = self.cleaned_data["name"]
        self.user.email = self.cleaned_data["email"]
        self.user.save(update_fields=["name", "email", "email_verified_at"])
        return self.user


class DeleteAccountForm(forms.Form):
    password = forms.CharField(strip=False)

    def __init__(self, *args, user, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean_password(self):
        password = self.cleaned_data["password"]
        if not self.user.check_password(password):
            raise forms.ValidationError("The password is incorrect.")
        return password


class PasswordUpdateForm(PasswordChangeForm):
    """Django's password change form under the field names the page posts.

    ``current_password``, ``password`` and ``password_confirmation`` map to
    ``old_password``, ``new_password1`` and ``new_password2``.
    """

    FIELD_ALIASES = {
        "current_password": "old_password",
        "password": "new_password1",
        "password_confirmation": "new_password2",
    }

    def __init__(self, user, data=None, **kwargs):
        if data is not None:
            data = {
                self.FIELD_ALIASES.get(key, key): value
                for key, value in data.items()
            }
        super().__init__(user, data, **kwargs)

    def aliased_errors(self):
        reverse = {field: alias for alias, field in self.FIELD_ALIASES.items()}
        return {
            reverse.get(field, field): str(error_list[0])
            for field, error_list in self.errors.items()
        }
