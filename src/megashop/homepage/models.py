"""Homepage content: editable sections and featured products."""

from django.db import models


class HomepageSection(models.Model):
    """Named content block on the storefront homepage (hero, benefits, ...).

    ``additional_data`` holds section specific extras such as the benefit
    list or the order form's ``default_product_id``. Older rows may store
    it as JSON text instead of an object.
    """

    section_name = models.CharField(max_length=100, db_index=True)
    title = models.CharField(max_length=255, blank=True)
    subtitle = models.TextField(blank=True)
    content = models.TextField(blank=True)
    image_path = models.CharField(max_length=500, blank=True)
    button_text = models.CharField(max_length=255, blank=True)
    button_url = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)
    additional_data = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "id"]

    def __str__(self):
        return self.section_name

    @classmethod
    def get_by_name(cls, name):
        return cls.objects.filter(section_name=name, is_active=True).order_by("sort_order", "id").first()

    @classmethod
    def get_all_active(cls):
        return cls.objects.filter(is_active=True).order_by("sort_order", "id")


class FeaturedProduct(models.Model):
    product = models.OneToOneField(
        "catalog.Product",
        on_delete=models.CASCADE,
        related_name="featured",
    )
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "id"]

    def __str__(self):
        return str(self.product)

    @classmethod
    def get_all_active(cls):
        return (
            cls.objects.filter(is_active=True)
            .select_related("product", "product__category")
            .prefetch_related("product__images")
            .order_by("sort_order", "id")
        )
