"""Forms for the admin settings pages."""

from django import forms

from megashop.core.forms import OptionalBooleanField

MAILERS = ["smtp", "sendmail", "mailgun", "ses", "postmark", "log", "array"]
ENCRYPTIONS = ["tls", "ssl", "null"]


class MailSettingsForm(forms.Form):
    MAIL_MAILER = forms.ChoiceField(choices=[(m, m) for m in MAILERS])
    MAIL_HOST = forms.CharField()
    MAIL_PORT = forms.IntegerField(
        min_value=1,
        error_messages={"invalid": "The mail port field must be a number."},
    )
    MAIL_USERNAME = forms.CharField(required=False)
    MAIL_PASSWORD = forms.CharField(required=False, strip=False)
    MAIL_ENCRYPTION = forms.ChoiceField(choices=[(e, e) for e in ENCRYPTIONS], required=False)
    MAIL_FROM_ADDRESS = forms.EmailField()
    MAIL_FROM_NAME = forms.CharField()

    def env_values(self):
        """Cleaned values ready for the ``.env`` file; encryption "null" becomes empty."""
        values = dict(self.cleaned_data)
        if values.get("MAIL_ENCRYPTION") in ("", "null"):
            values["MAIL_ENCRYPTION"] = None
        return values


class TestEmailForm(forms.Form):
    test_email = forms.EmailField()


class GoogleAnalyticsForm(forms.Form):
    GOOGLE_ANALYTICS_MEASUREMENT_ID = forms.CharField(max_length=255, required=False)
    GOOGLE_ANALYTICS_API_SECRET = forms.CharField(max_length=255, required=False)
    GOOGLE_ANALYTICS_DEBUG_MODE = OptionalBooleanField()
    GOOGLE_ANALYTICS_ENABLED = OptionalBooleanField()


class FacebookPixelForm(forms.Form):
    FACEBOOK_PIXEL_ID = forms.CharField(max_length=255, required=False)
    FACEBOOK_PIXEL_ACCESS_TOKEN = forms.CharField(max_length=255, required=False)
    FACEBOOK_PIXEL_DEBUG_MODE = OptionalBooleanField()
    FACEBOOK_PIXEL_ENABLED = OptionalBooleanField()


class TestEventForm(forms.Form):
    debug_mode = OptionalBooleanField()
