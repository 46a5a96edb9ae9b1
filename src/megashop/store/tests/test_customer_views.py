"""Tests for the customer dashboard, order history and wishlist."""

import json
from decimal import Decimal

import pytest
from django.test import Client
from django.urls import reverse

from megashop.store.models import Order, OrderStatus, OrderTracking, Wishlist


def make_order(user=None, mobile="01711000000", total="100.00", **kwargs):
    order = Order.objects.create(
        user=user,
        name=kwargs.pop("name", "Rahim Uddin"),
        email=kwargs.pop("email", "rahim@example.com"),
        shipping_address="Dhaka",
        mobile=mobile,
        total=Decimal(total),
        **kwargs,
    )
    OrderTracking.objects.create(order=order, status=order.status)
    return order


@pytest.mark.django_db
class TestDashboardView:
    def test_requires_login(self):
        response = Client().get(reverse("store:dashboard"))

        assert response.status_code == 302
        assert response.url.startswith("/accounts/login/")

    def test_shows_five_recent_orders_and_four_products(self, customer_client, customer, category, inertia):
        from megashop.catalog.models import Product

        for i in range(6):
            make_order(customer, total=f"{i + 1}.00")
        make_order(None)
        for i in range(5):
            Product.objects.create(name=f"P{i}", price=Decimal("1"), category=category)

        props = customer_client.get(reverse("store:dashboard"), **inertia).json()["props"]

        assert len(props["recentOrders"]) == 5
        assert all(o["user_id"] == str(customer.pk) for o in props["recentOrders"])
        assert props["recentOrders"][0]["tracking"]["status"] == OrderStatus.PENDING
        assert len(props["recentlyViewedProducts"]) == 4


@pytest.mark.django_db
class TestUserOrders:
    def test_lists_only_own_orders(self, customer_client, customer, other_customer, inertia):
        mine = make_order(customer)
        make_order(other_customer)

        props = customer_client.get(reverse("store:user-order-list"), **inertia).json()["props"]

        assert [o["id"] for o in props["orders"]["data"]] == [mine.pk]
        assert props["orders"]["per_page"] == 10

    def test_detail_of_other_users_order_is_404(self, customer_client, other_customer):
        theirs = make_order(other_customer)

        response = customer_client.get(reverse("store:user-order-detail", args=[theirs.pk]))

        assert response.status_code == 404

    def test_detail_includes_tracking(self, customer_client, customer, inertia):
        order = make_order(customer)
        order.tracking.tracking_id = "TRK-1"
        order.tracking.save()

        props = customer_client.get(
            reverse("store:user-order-detail", args=[order.pk]), **inertia
        ).json()["props"]

        assert props["order"]["tracking"]["tracking_id"] == "TRK-1"


@pytest.mark.django_db
class TestWishlist:
    def post_json(self, client, name, payload):
        return client.post(reverse(name), json.dumps(payload), content_type="application/json")

    def test_add_is_idempotent(self, customer_client, customer, product):
        first = self.post_json(customer_client, "store:wishlist-add", {"product_id": product.pk})
        second = self.post_json(customer_client, "store:wishlist-add", {"product_id": product.pk})

        assert first.json()["success"] is True
        assert first.json()["wishlist_id"] == second.json()["wishlist_id"]
        assert Wishlist.objects.filter(user=customer).count() == 1

    def test_add_invalid_product_is_422(self, customer_client, db):
        response = self.post_json(customer_client, "store:wishlist-add", {"product_id": 999})

        assert response.status_code == 422
        assert "product_id" in response.json()["errors"]

    def test_remove(self, customer_client, customer, product):
        Wishlist.objects.create(user=customer, product=product)

        response = self.post_json(customer_client, "store:wishlist-remove", {"product_id": product.pk})

        assert response.json() == {"success": True, "message": "Product removed from wishlist"}
        assert not Wishlist.objects.exists()

    def test_remove_with_delete_method(self, customer_client, customer, product):
        Wishlist.objects.create(user=customer, product=product)

        response = customer_client.delete(
            reverse("store:wishlist-remove"),
            json.dumps({"product_id": product.pk}),
            content_type="application/json",
        )

        assert response.json()["success"] is True

    def test_remove_missing_entry(self, customer_client, product):
        response = self.post_json(customer_client, "store:wishlist-remove", {"product_id": product.pk})

        assert response.json()["success"] is False

    def test_check(self, customer_client, customer, product, second_product):
        Wishlist.objects.create(user=customer, product=product)
        url = reverse("store:wishlist-check")

        assert customer_client.get(url, {"product_id": product.pk}).json() == {"in_wishlist": True}
        assert customer_client.get(url, {"product_id": second_product.pk}).json() == {"in_wishlist": False}

    def test_index_lists_items(self, customer_client, customer, product, inertia):
        Wishlist.objects.create(user=customer, product=product)

        props = customer_client.get(reverse("store:wishlist"), **inertia).json()["props"]

        assert props["wishlistItems"][0]["product_id"] == product.pk
        assert props["wishlistItems"][0]["price"] == "1500.00"

    def test_guests_are_redirected(self, product):
        response = Client().post(reverse("store:wishlist-add"), {"product_id": product.pk})

        assert response.status_code == 302
