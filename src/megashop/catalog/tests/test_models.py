"""Tests for catalog models: category tree, slugs and ratings."""

from decimal import Decimal

import pytest

from megashop.catalog.models import Category, Product, Review


@pytest.fixture
def tree(db):
    """Electronics > Phones > Android"""
    root = Category.objects.create(name="Electronics")
    phones = Category.objects.create(name="Phones", parent=root)
    android = Category.objects.create(name="Android", parent=phones)
    return root, phones, android


@pytest.mark.django_db
class TestCategorySlug:
    def test_slug_is_generated_from_name(self):
        assert Category.objects.create(name="Home & Garden").slug == "home-garden"

    def test_generated_slug_gets_numeric_suffix(self):
        Category.objects.create(name="Books")

        assert Category.objects.create(name="Books").slug == "books-2"
        assert Category.objects.create(name="Books").slug == "books-3"

    def test_explicit_slug_is_kept(self):
        assert Category.objects.create(name="Books", slug="reading").slug == "reading"


class TestCategoryTree:
    def test_ancestors_root_first(self, tree):
        root, phones, android = tree

        assert android.ancestors() == [root, phones]
        assert root.ancestors() == []

    def test_descendants_breadth_first(self, tree):
        root, phones, android = tree
        laptops = Category.objects.create(name="Laptops", parent=root)

        assert root.descendants() == [laptops, phones, android]

    def test_is_child_of(self, tree):
        root, phones, android = tree

        assert android.is_child_of(root)
        assert not root.is_child_of(android)

    def test_path(self, tree):
        assert tree[2].path == "Electronics > Phones > Android"

    def test_ancestors_stop_on_cycle(self, tree):
        root, phones, android = tree
        Category.objects.filter(pk=root.pk).update(parent=android)
        android.refresh_from_db()

        assert [c.name for c in android.ancestors()] == ["Electronics", "Phones"]


@pytest.mark.django_db
class TestProductRating:
    def test_average_follows_reviews(self, product):
        Review.objects.create(product=product, name="A", rating=5)
        Review.objects.create(product=product, name="B", rating=4)
        product.refresh_from_db()

        assert product.avg_rating == Decimal("4.50")

    def test_average_resets_when_reviews_are_deleted(self, product):
        review = Review.objects.create(product=product, name="A", rating=2)
        review.delete()
        product.refresh_from_db()

        assert product.avg_rating == Decimal("0.00")

    def test_main_image_falls_back_to_flagged_image(self, product):
        product.images.create(image_path="uploads/side.png")
        product.images.create(image_path="uploads/front.png", is_main=True)

        assert product.main_image_path == "uploads/front.png"

    def test_main_image_uses_prefetched_images(self, product, django_assert_num_queries):
        product.images.create(image_path="uploads/front.png", is_main=True)
        loaded = Product.objects.prefetch_related("images").get(pk=product.pk)

        with django_assert_num_queries(0):
            assert loaded.main_image_path == "uploads/front.png"
