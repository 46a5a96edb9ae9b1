"""Forms for accounts and admin user management."""

from django import forms
from django.contrib.auth import get_user_model, password_validation

User = get_user_model()


class UserForm(forms.Form):
    """Create or update a user from the admin panel.

    The password is required on create and optional on update; when given
    it must be confirmed and pass the configured password validators.
    """

    name = forms.CharField(max_length=255)
    email = forms.EmailField(max_length=255)
    password = forms.CharField(required=False, strip=False)
    password_confirmation = forms.CharField(required=False, strip=False)
    role = forms.ChoiceField(choices=User.Role.choices)

    def __init__(self, *args, instance=None, **kwargs):
        self.instance = instance
        super().__init__(*args, **kwargs)

    def clean_email(self):
        email = self.cleaned_data["email"].strip().lower()
        existing = User.objects.filter(email__iexact=email)
        if self.instance is not None:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise forms.ValidationError("The email has already been taken.")
        return email

    def clean(self):
        cleaned = super().clean()
        password = cleaned.get("password")
        confirmation = cleaned.get("password_confirmation")

        if not password:
            if self.instance is None:
                self.add_error("password", "The password field is required.")
            return cleaned

        if password != confirmation:
            self.add_error("password", "The password field confirmation does not match.")
            return cleaned

        candidate = self.instance or User(
            email=cleaned.get("email", ""),
            name=cleaned.get("name", ""),
        )
        try:
            password_validation.validate_password(password, candidate)
        except forms.ValidationError as exc:
            self.add_error("password", exc)
        return cleaned

    def save(self):
        data = self.cleaned_data
        user = self.instance or User(email=data["email"])
        user.name = data["name"]
        user.email = data["email"]
        user.role = data["role"]
        if data.get("password"):
            user.set_password(data["password"])
        user.save()
        return user


class RegistrationForm(UserForm):
    """Public sign-up; new accounts always get the ``user`` role."""

    role = None

    def save(self):
        self.cleaned_data["role"] = User.Role.USER
        return super().save()


class OptionalBooleanField(forms.Field):
    """Boolean that tells "not sent" (None) apart from an explicit false.

    Accepts the usual checkbox and JSON spellings.
    """

    TRUE_VALUES = {"1", "true", "on", "yes"}
    FALSE_VALUES = {"0", "false", "off", "no"}

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)

    def to_python(self, value):
        if value in (None, ""):
            return None
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized in self.TRUE_VALUES:
            return True
        if normalized in self.FALSE_VALUES:
            return False
        raise forms.ValidationError("The field must be true or false.")
