"""Tests for catalog admin panel views."""

from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from megashop.catalog.models import Category, Product


@pytest.mark.django_db
class TestAdminDashboard:
    def test_customers_are_forbidden(self, customer_client):
        assert customer_client.get(reverse("catalog:admin-dashboard")).status_code == 403

    def test_dashboard_counts_products(self, admin_client, product, inertia):
        props = admin_client.get(reverse("catalog:admin-dashboard"), **inertia).json()["props"]

        assert props["productCount"] == 1
        assert props["recentProducts"][0]["name"] == product.name


@pytest.mark.django_db
class TestCategoryAdmin:
    def test_create_slugifies_name_when_blank(self, admin_client):
        response = admin_client.post(reverse("catalog:admin-category-create"), {
            "name": "Kitchen Tools",
            "slug": "",
        })

        assert response.status_code == 302
        assert Category.objects.filter(slug="kitchen-tools").exists()

    def test_create_rejects_taken_slug(self, admin_client, category):
        admin_client.post(reverse("catalog:admin-category-create"), {"name": "Electronics"})

        assert admin_client.session["errors"]["slug"] == "The slug has already been taken."
        assert Category.objects.count() == 1

    def test_update_circular_parent_is_a_field_error(self, admin_client, category):
        child = Category.objects.create(name="Phones", parent=category)

        admin_client.post(reverse("catalog:admin-category-update", args=[category.pk]), {
            "name": "Electronics",
            "slug": "electronics",
            "parent_id": child.pk,
        })

        assert "parent_id" in admin_client.session["errors"]
        category.refresh_from_db()
        assert category.parent is None

    def test_edit_excludes_self_and_descendants_from_parents(self, admin_client, category, inertia):
        child = Category.objects.create(name="Phones", parent=category)
        other = Category.objects.create(name="Books")

        props = admin_client.get(
            reverse("catalog:admin-category-edit", args=[category.pk]), **inertia
        ).json()["props"]

        assert [c["id"] for c in props["parentCategories"]] == [other.pk]
        assert child.pk not in [c["id"] for c in props["parentCategories"]]

    def test_delete_in_use_flashes_error(self, admin_client, category, product, inertia):
        admin_client.post(reverse("catalog:admin-category-delete", args=[category.pk]))

        flash = admin_client.get(reverse("catalog:admin-category-list"), **inertia).json()["props"]["flash"]
        assert "Reassign products first" in flash["error"]
        assert Category.objects.filter(pk=category.pk).exists()


@pytest.mark.django_db
class TestProductAdmin:
    def test_create_product_with_images(self, admin_client, category):
        response = admin_client.post(reverse("catalog:admin-product-create"), {
            "name": "Tablet",
            "price": "12000.00",
            "category_id": category.pk,
            "stock": "4",
            "meta_tags": "tablet, android",
            "images": [
                SimpleUploadedFile("one.jpg", b"jpeg", content_type="image/jpeg"),
                SimpleUploadedFile("two.webp", b"webp", content_type="image/webp"),
            ],
        })

        assert response.status_code == 302
        product = Product.objects.get(name="Tablet")
        assert product.images.count() == 2
        assert product.main_image.endswith(".jpg")

    def test_create_rejects_non_image_upload(self, admin_client, category):
        admin_client.post(reverse("catalog:admin-product-create"), {
            "name": "Tablet",
            "price": "100",
            "category_id": category.pk,
            "stock": "1",
            "images": [SimpleUploadedFile("notes.pdf", b"%PDF", content_type="application/pdf")],
        })

        assert "images" in admin_client.session["errors"]
        assert not Product.objects.filter(name="Tablet").exists()

    def test_create_requires_valid_category(self, admin_client, db):
        admin_client.post(reverse("catalog:admin-product-create"), {
            "name": "Orphan",
            "price": "1",
            "category_id": "999",
            "stock": "1",
        })

        assert admin_client.session["errors"]["category_id"] == "The selected category is invalid."

    def test_update_product(self, admin_client, product, category):
        admin_client.post(reverse("catalog:admin-product-update", args=[product.pk]), {
            "name": "Wireless Headphones Pro",
            "price": "1999.99",
            "category_id": category.pk,
            "stock": "2",
        })

        product.refresh_from_db()
        assert product.name == "Wireless Headphones Pro"
        assert product.price == Decimal("1999.99")
        assert product.stock == 2

    def test_delete_product(self, admin_client, product):
        admin_client.post(reverse("catalog:admin-product-delete", args=[product.pk]))

        assert not Product.objects.filter(pk=product.pk).exists()
