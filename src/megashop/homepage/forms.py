"""Forms for homepage administration."""

from django import forms

from megashop.catalog.models import Product
from megashop.core.forms import OptionalBooleanField
from megashop.core.uploads import validate_image_upload

from .models import FeaturedProduct


class SectionForm(forms.Form):
    """Section update. ``additional_data`` takes an object or JSON text."""

    title = forms.CharField(max_length=255, required=False)
    subtitle = forms.CharField(required=False)
    content = forms.CharField(required=False)
    button_text = forms.CharField(max_length=255, required=False)
    button_url = forms.CharField(max_length=255, required=False)
    is_active = OptionalBooleanField()
    sort_order = forms.IntegerField(required=False)
    additional_data = forms.JSONField(
        required=False,
        error_messages={"invalid": "The additional data field must be valid JSON."},
    )
    image = forms.FileField(required=False, validators=[validate_image_upload])

    def changed_values(self):
        """Cleaned values for the fields present in the submitted data."""
        text_fields = ("title", "subtitle", "content", "button_text", "button_url")
        values = {}
        for field in text_fields:
            if field in self.data:
                values[field] = self.cleaned_data.get(field) or ""
        for field in ("is_active", "sort_order"):
            if self.cleaned_data.get(field) is not None:
                values[field] = self.cleaned_data[field]
        if "additional_data" in self.data:
            values["additional_data"] = self.cleaned_data.get("additional_data")
        return values


class FeaturedProductForm(forms.Form):
    product_id = forms.ModelChoiceField(
        queryset=Product.objects.all(),
        error_messages={"invalid_choice": "The selected product id is invalid."},
    )
    sort_order = forms.IntegerField(required=False)


class FeaturedOrderForm(forms.Form):
    """``products`` is a list of ``{"id": ..., "sort_order": ...}``."""

    products = forms.JSONField()

    def clean_products(self):
        products = self.cleaned_data.get("products")
        if not isinstance(products, list) or not products:
            raise forms.ValidationError("The products field is required.")

        cleaned = []
        for entry in products:
            try:
                cleaned.append({"id": int(entry["id"]), "sort_order": int(entry["sort_order"])})
            except (KeyError, TypeError, ValueError):
                raise forms.ValidationError("Each product needs an id and a sort order.")

        ids = {entry["id"] for entry in cleaned}
        if FeaturedProduct.objects.filter(pk__in=ids).count() != len(ids):
            raise forms.ValidationError("The selected featured product is invalid.")
        return cleaned
