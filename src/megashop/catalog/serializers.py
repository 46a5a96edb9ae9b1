"""Plain-dict serializers for catalog page props."""

from megashop.core.utils import placeholder_image_url, storage_url


def category_to_dict(category):
    return {
        "id": category.pk,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "parent_id": category.parent_id,
        "image_path": category.image_path or None,
        "image_url": storage_url(category.image_path),
        "is_active": category.is_active,
        "sort_order": category.sort_order,
    }


def category_option(category):
    return {"id": category.pk, "name": category.name, "slug": category.slug}


def image_to_dict(image):
    return {
        "id": image.pk,
        "image_path": image.image_path,
        "url": storage_url(image.image_path),
        "is_main": image.is_main,
    }


def review_to_dict(review):
    return {
        "id": review.pk,
        "name": review.author_name,
        "rating": review.rating,
        "comment": review.comment,
        "is_anonymous": review.is_anonymous,
        "user_id": str(review.user_id) if review.user_id else None,
        "created_at": review.created_at.isoformat(),
    }


def product_to_dict(product):
    """Listing representation of a product."""
    main_image = product.main_image_path
    return {
        "id": product.pk,
        "name": product.name,
        "price": product.price,
        "description": product.description,
        "category": product.category_name,
        "category_id": product.category_id,
        "stock": product.stock,
        "main_image": main_image or None,
        "main_image_url": storage_url(main_image) or placeholder_image_url(),
        "avg_rating": product.avg_rating,
        "meta_title": product.meta_title,
        "meta_description": product.meta_description,
        "created_at": product.created_at.isoformat(),
    }


def product_detail_to_dict(product):
    """Product with images, meta tags and reviews."""
    data = product_to_dict(product)
    data["images"] = [image_to_dict(image) for image in product.images.all()]
    data["meta_tags"] = [tag.tag for tag in product.meta_tags.all()]
    data["reviews"] = [review_to_dict(review) for review in product.reviews.select_related("user")]
    return data
