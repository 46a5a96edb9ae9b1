"""Forms for checkout and order administration."""

import json

from django import forms

from megashop.catalog.models import Product
from megashop.core.forms import OptionalBooleanField

from .models import OrderStatus


class CheckoutForm(forms.Form):
    """Checkout details plus the cart as ``[{"id": ..., "quantity": ...}]``."""

    name = forms.CharField(max_length=255)
    email = forms.EmailField(max_length=255, required=False)
    shipping_address = forms.CharField()
    mobile = forms.CharField(max_length=20)
    items = forms.JSONField()

    def clean_items(self):
        items = self.cleaned_data.get("items")
        if not isinstance(items, list) or not items:
            raise forms.ValidationError("The items field must have at least 1 item.")

        cleaned = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise forms.ValidationError(f"Item {index + 1} is invalid.")
            try:
                product_id = int(item.get("id"))
                quantity = int(item.get("quantity"))
            except (TypeError, ValueError):
                raise forms.ValidationError(f"Item {index + 1} needs a product id and a quantity.")
            if quantity < 1:
                raise forms.ValidationError(f"Item {index + 1} quantity must be at least 1.")
            cleaned.append({"id": product_id, "quantity": quantity})

        ids = {item["id"] for item in cleaned}
        found = set(Product.objects.filter(pk__in=ids).values_list("pk", flat=True))
        missing = ids - found
        if missing:
            raise forms.ValidationError(
                "The selected product is invalid: %s." % ", ".join(str(pk) for pk in sorted(missing))
            )
        return cleaned


class StatusForm(forms.Form):
    status = forms.ChoiceField(choices=OrderStatus.choices)


class TrackingForm(forms.Form):
    tracking_id = forms.CharField(max_length=255, required=False)
    partner_id = forms.CharField(max_length=255, required=False)
    status = forms.ChoiceField(choices=OrderStatus.choices)
    details = forms.CharField(required=False)

    def clean_details(self):
        raw = self.cleaned_data.get("details")
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            raise forms.ValidationError("The details field must be a valid JSON string.")

    def clean(self):
        cleaned = super().clean()
        cleaned["details_sent"] = "details" in self.data
        return cleaned


class OrderExportForm(forms.Form):
    status = forms.ChoiceField(
        choices=[("all", "All")] + list(OrderStatus.choices),
        required=False,
    )
    start_date = forms.DateField(required=False)
    end_date = forms.DateField(required=False)

    def clean(self):
        cleaned = super().clean()
        start, end = cleaned.get("start_date"), cleaned.get("end_date")
        if start and end and end < start:
            self.add_error("end_date", "The end date must be a date after or equal to start date.")
        return cleaned


class OrderImportForm(forms.Form):
    csv_file = forms.FileField()
    skip_existing = OptionalBooleanField()

    def clean_csv_file(self):
        upload = self.cleaned_data["csv_file"]
        if not upload.name.lower().endswith((".csv", ".txt")):
            raise forms.ValidationError("The file must be a CSV file.")
        return upload

    def clean_skip_existing(self):
        value = self.cleaned_data.get("skip_existing")
        return True if value is None else value
