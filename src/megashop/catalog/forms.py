"""Forms for the catalog admin and reviews."""

from django import forms
from django.utils.text import slugify

from megashop.core.forms import OptionalBooleanField
from megashop.core.uploads import validate_image_upload

from .models import Category


class CategoryForm(forms.Form):
    name = forms.CharField(max_length=255)
    slug = forms.CharField(max_length=255, required=False)
    description = forms.CharField(required=False)
    parent_id = forms.IntegerField(required=False)
    image = forms.FileField(required=False, validators=[validate_image_upload])
    is_active = OptionalBooleanField()
    sort_order = forms.IntegerField(required=False)

    def __init__(self, *args, instance=None, **kwargs):
        self.instance = instance
        super().__init__(*args, **kwargs)

    def clean_slug(self):
        slug = slugify(self.cleaned_data.get("slug") or "")
        return slug

    def clean_parent_id(self):
        parent_id = self.cleaned_data.get("parent_id")
        if parent_id is None:
            return None
        parent = Category.objects.filter(pk=parent_id).first()
        if parent is None:
            raise forms.ValidationError("The selected parent is invalid.")
        return parent

    def clean(self):
        cleaned = super().clean()
        name = cleaned.get("name")
        if not cleaned.get("slug") and name:
            cleaned["slug"] = slugify(name)

        slug = cleaned.get("slug")
        if slug:
            taken = Category.objects.filter(slug=slug)
            if self.instance is not None:
                taken = taken.exclude(pk=self.instance.pk)
            if taken.exists():
                self.add_error("slug", "The slug has already been taken.")
        cleaned["parent"] = cleaned.pop("parent_id", None)
        return cleaned


class ProductForm(forms.Form):
    """Product fields. Uploaded images are checked with ``image_upload_errors``."""

    name = forms.CharField(max_length=255)
    price = forms.DecimalField(min_value=0, max_digits=10, decimal_places=2)
    description = forms.CharField(required=False)
    category_id = forms.ModelChoiceField(
        queryset=Category.objects.all(),
        error_messages={"invalid_choice": "The selected category is invalid."},
    )
    stock = forms.IntegerField(min_value=0)
    meta_description = forms.CharField(required=False)
    meta_title = forms.CharField(max_length=255, required=False)
    meta_tags = forms.CharField(required=False)
    main_image_id = forms.IntegerField(required=False)
    set_first_as_main = OptionalBooleanField()

    def clean(self):
        cleaned = super().clean()
        cleaned["category"] = cleaned.pop("category_id", None)
        cleaned["meta_tags_sent"] = "meta_tags" in self.data
        return cleaned


class ReviewForm(forms.Form):
    rating = forms.IntegerField(min_value=1, max_value=5)
    comment = forms.CharField(required=False)
    name = forms.CharField(max_length=255, required=False)
    is_anonymous = OptionalBooleanField()

    def clean(self):
        cleaned = super().clean()
        cleaned["is_anonymous"] = bool(cleaned.get("is_anonymous"))
        if cleaned["is_anonymous"] and not cleaned.get("name"):
            self.add_error("name", "The name field is required for anonymous reviews.")
        return cleaned


class CsvUploadForm(forms.Form):
    csv_file = forms.FileField()

    def clean_csv_file(self):
        upload = self.cleaned_data["csv_file"]
        if not upload.name.lower().endswith((".csv", ".txt")):
            raise forms.ValidationError("The file must be a CSV file.")
        return upload
