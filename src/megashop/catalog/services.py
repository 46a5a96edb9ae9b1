"""Catalog services.

Write operations for categories, products and reviews. Views validate
input with the forms in ``forms.py`` and hand the cleaned data here.
"""

import logging

from django.db import transaction

from megashop.core.uploads import store_upload
from megashop.core.utils import delete_stored_file

from .exceptions import CategoryInUseError, CircularCategoryError
from .models import Category, Product, ProductImage, ProductMetaTag, Review

logger = logging.getLogger(__name__)

CATEGORY_IMAGE_DIR = "categories"
PRODUCT_IMAGE_DIR = "uploads"


def parse_meta_tags(raw):
    """Split a comma separated tag string, dropping blanks."""
    return [tag.strip() for tag in (raw or "").split(",") if tag.strip()]


# =============================================================================
# Categories
# =============================================================================


def check_parent(category, parent):
    """Raise CircularCategoryError if ``parent`` is ``category`` or below it.

    Raises:
        CircularCategoryError: If the assignment would create a cycle
    """
    if parent is None:
        return
    if parent.pk == category.pk:
        raise CircularCategoryError("A category cannot be its own parent.")
    if parent.is_child_of(category):
        raise CircularCategoryError("Cannot set a descendant as parent (circular reference).")


@transaction.atomic
def create_category(data, image=None):
    """Create a category from cleaned form data.

    Args:
        data: Cleaned ``CategoryForm`` data
        image: Optional uploaded image

    Returns:
        The new Category
    """
    category = Category.objects.create(
        name=data["name"],
        slug=data.get("slug") or "",
        description=data.get("description") or "",
        parent=data.get("parent"),
        image_path=store_upload(image, CATEGORY_IMAGE_DIR) if image else "",
        is_active=True if data.get("is_active") is None else data["is_active"],
        sort_order=data.get("sort_order") or 0,
    )
    logger.info("Category created", extra={"category_id": category.pk, "slug": category.slug})
    return category


@transaction.atomic
def update_category(category, data, image=None):
    """Update a category; unspecified is_active/sort_order keep their values.

    Raises:
        CircularCategoryError: If the new parent is the category or a descendant
    """
    parent = data.get("parent")
    check_parent(category, parent)

    if image:
        delete_stored_file(category.image_path)
        category.image_path = store_upload(image, CATEGORY_IMAGE_DIR)

    category.name = data["name"]
    category.slug = data.get("slug") or category.slug
    category.description = data.get("description") or ""
    category.parent = parent
    if data.get("is_active") is not None:
        category.is_active = data["is_active"]
    if data.get("sort_order") is not None:
        category.sort_order = data["sort_order"]
    category.save()

    Product.objects.filter(category=category).update(category_name=category.name)
    logger.info("Category updated", extra={"category_id": category.pk})
    return category


@transaction.atomic
def delete_category(category):
    """Delete an empty leaf category and its stored image.

    Raises:
        CategoryInUseError: If the category has products or subcategories
    """
    product_count = category.products.count()
    if product_count:
        raise CategoryInUseError(
            f"Cannot delete category with {product_count} products. Reassign products first."
        )
    if category.children.exists():
        raise CategoryInUseError(
            "Cannot delete category with subcategories. Delete or reassign subcategories first."
        )

    image_path = category.image_path
    category_id = category.pk
    category.delete()
    delete_stored_file(image_path)
    logger.info("Category deleted", extra={"category_id": category_id})


# =============================================================================
# Products
# =============================================================================


def _add_images(product, uploads):
    return [
        ProductImage.objects.create(product=product, image_path=store_upload(upload, PRODUCT_IMAGE_DIR))
        for upload in uploads
    ]


def _set_main_image(product, image):
    product.images.update(is_main=False)
    image.is_main = True
    image.save(update_fields=["is_main"])
    product.main_image = image.image_path
    product.save(update_fields=["main_image", "updated_at"])


def _replace_meta_tags(product, raw):
    product.meta_tags.all().delete()
    ProductMetaTag.objects.bulk_create(
        [ProductMetaTag(product=product, tag=tag) for tag in parse_meta_tags(raw)]
    )


@transaction.atomic
def create_product(data, images=()):
    """Create a product with its images and meta tags.

    The first uploaded image becomes the main image.

    Args:
        data: Cleaned ``ProductForm`` data
        images: Uploaded image files

    Returns:
        The new Product
    """
    category = data["category"]
    product = Product.objects.create(
        name=data["name"],
        price=data["price"],
        description=data.get("description") or "",
        category=category,
        category_name=category.name if category else "",
        stock=data["stock"],
        meta_description=data.get("meta_description") or "",
        meta_title=data.get("meta_title") or "",
    )

    created = _add_images(product, images)
    if created:
        _set_main_image(product, created[0])

    _replace_meta_tags(product, data.get("meta_tags"))
    logger.info("Product created", extra={"product_id": product.pk, "images": len(created)})
    return product


@transaction.atomic
def update_product(product, data, images=(), remove_image_ids=()):
    """Update product fields, images and meta tags.

    ``set_first_as_main`` makes the first new upload the main image;
    otherwise ``main_image_id`` selects an existing image. Meta tags are
    replaced only when the field was sent.
    """
    category = data["category"]
    product.name = data["name"]
    product.price = data["price"]
    product.description = data.get("description") or ""
    product.category = category
    product.category_name = category.name if category else ""
    product.stock = data["stock"]
    product.meta_description = data.get("meta_description") or ""
    product.meta_title = data.get("meta_title") or ""
    product.save()

    for image in product.images.filter(pk__in=[i for i in remove_image_ids if str(i).isdigit()]):
        delete_stored_file(image.image_path)
        if product.main_image == image.image_path:
            product.main_image = ""
            product.save(update_fields=["main_image", "updated_at"])
        image.delete()

    created = _add_images(product, images)
    set_first_as_main = bool(data.get("set_first_as_main"))
    if set_first_as_main and created:
        _set_main_image(product, created[0])

    main_image_id = data.get("main_image_id")
    if main_image_id and not set_first_as_main:
        image = product.images.filter(pk=main_image_id).first()
        if image is not None:
            _set_main_image(product, image)

    if data.get("meta_tags_sent"):
        _replace_meta_tags(product, data.get("meta_tags"))

    logger.info(
        "Product updated",
        extra={"product_id": product.pk, "added_images": len(created)},
    )
    return product


@transaction.atomic
def delete_product(product):
    """Delete a product and the files of its images."""
    paths = list(product.images.values_list("image_path", flat=True))
    product_id = product.pk
    product.delete()
    for path in paths:
        delete_stored_file(path)
    logger.info("Product deleted", extra={"product_id": product_id})


# =============================================================================
# Reviews
# =============================================================================


def add_review(product, data, user=None):
    """Attach a review to ``product``.

    Anonymous reviews carry the given name; others belong to ``user``.
    The product rating is refreshed by the review signals.
    """
    review = Review(
        product=product,
        rating=data["rating"],
        comment=data.get("comment") or "",
        is_anonymous=data["is_anonymous"],
    )
    if data["is_anonymous"]:
        review.name = data["name"]
    elif user is not None and user.is_authenticated:
        review.user = user
        review.name = user.get_display_name()
    else:
        review.name = data.get("name") or ""
    review.save()
    return review
