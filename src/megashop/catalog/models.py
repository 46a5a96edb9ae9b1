"""Catalog models: category tree, products and their reviews."""

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Avg
from django.utils.text import slugify


class Category(models.Model):
    """Product category. ``parent`` links categories into a tree."""

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    description = models.TextField(blank=True)
    parent = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="children",
    )
    image_path = models.CharField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = self.unique_slug(self.name, exclude_pk=self.pk)
        super().save(*args, **kwargs)

    @classmethod
    def unique_slug(cls, name, exclude_pk=None):
        """Slugify ``name``, adding a numeric suffix until the slug is free."""
        base = slugify(name) or "category"
        slug = base
        counter = 2
        taken = cls.objects.exclude(pk=exclude_pk) if exclude_pk else cls.objects.all()
        while taken.filter(slug=slug).exists():
            slug = f"{base}-{counter}"
            counter += 1
        return slug

    def ancestors(self):
        """Ancestors from the root down to the direct parent."""
        chain = []
        seen = {self.pk}
        node = self.parent
        while node is not None and node.pk not in seen:
            chain.append(node)
            seen.add(node.pk)
            node = node.parent
        chain.reverse()
        return chain

    def descendants(self):
        """All categories below this one, breadth first."""
        found = []
        seen = {self.pk}
        frontier = [self.pk]
        while frontier:
            children = [
                child
                for child in Category.objects.filter(parent_id__in=frontier).order_by("sort_order", "name")
                if child.pk not in seen
            ]
            for child in children:
                seen.add(child.pk)
            found.extend(children)
            frontier = [child.pk for child in children]
        return found

    def is_child_of(self, other):
        """True when ``other`` is somewhere above this category."""
        return any(ancestor.pk == other.pk for ancestor in self.ancestors())

    @property
    def path(self):
        return " > ".join([a.name for a in self.ancestors()] + [self.name])


class Product(models.Model):
    """A sellable product.

    ``category_name`` is a denormalized copy of the category's name kept
    for listings and CSV exports.
    """

    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    description = models.TextField(blank=True)
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="products",
    )
    category_name = models.CharField(max_length=255, blank=True)
    stock = models.PositiveIntegerField(default=0)
    main_image = models.CharField(max_length=500, blank=True)
    avg_rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0"))
    meta_description = models.TextField(blank=True)
    meta_title = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name

    @property
    def main_image_path(self):
        """The main image path, falling back to the image flagged as main."""
        if self.main_image:
            return self.main_image
        # Iterate so a prefetch of "images" is used
        image = next((i for i in self.images.all() if i.is_main), None)
        return image.image_path if image else ""

    def update_average_rating(self):
        average = self.reviews.aggregate(avg=Avg("rating"))["avg"] or 0
        self.avg_rating = Decimal(str(average)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        Product.objects.filter(pk=self.pk).update(avg_rating=self.avg_rating)


class ProductImage(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="images")
    image_path = models.CharField(max_length=500)
    is_main = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-is_main", "id"]

    def __str__(self):
        return self.image_path


class ProductMetaTag(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="meta_tags")
    tag = models.CharField(max_length=255)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.tag


class Review(models.Model):
    """Product review, either by a signed-in user or anonymous with a name."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="reviews")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviews",
    )
    name = models.CharField(max_length=255, blank=True)
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    comment = models.TextField(blank=True)
    is_anonymous = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.product} ({self.rating})"

    @property
    def author_name(self):
        if self.is_anonymous or self.user is None:
            return self.name or "Anonymous"
        return self.user.get_display_name()
