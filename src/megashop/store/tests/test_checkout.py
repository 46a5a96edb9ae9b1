"""Tests for checkout: stock, totals and post-commit notifications."""

import json
from decimal import Decimal
from unittest import mock

import pytest
from django.test import Client
from django.urls import reverse

from megashop.store import services
from megashop.store.exceptions import InsufficientStockError, ProductUnavailableError
from megashop.store.models import Order, OrderStatus


def checkout_data(*items, **overrides):
    data = {
        "name": "Rahim Uddin",
        "email": "rahim@example.com",
        "shipping_address": "House 12, Road 5, Dhanmondi, Dhaka",
        "mobile": "01711000000",
        "items": [{"id": pk, "quantity": qty} for pk, qty in items],
    }
    data.update(overrides)
    return data


def post_checkout(client, data):
    return client.post(reverse("store:checkout"), json.dumps(data), content_type="application/json")


# =============================================================================
# place_order service
# =============================================================================


@pytest.mark.django_db
class TestPlaceOrder:
    def test_creates_order_items_and_tracking(self, product, second_product):
        order = services.place_order(checkout_data((product.pk, 2), (second_product.pk, 1)))

        assert order.total == Decimal("3800.50")
        assert order.status == OrderStatus.PENDING
        assert order.user is None
        assert order.items.count() == 2
        assert order.tracking.status == OrderStatus.PENDING

    def test_decrements_stock(self, product):
        services.place_order(checkout_data((product.pk, 3)))

        product.refresh_from_db()
        assert product.stock == 7

    def test_item_snapshot_keeps_name_and_price(self, product):
        order = services.place_order(checkout_data((product.pk, 1)))
        product.name = "Renamed"
        product.price = Decimal("1.00")
        product.save()

        item = order.items.get()
        assert item.name == "Wireless Headphones"
        assert item.price == Decimal("1500.00")
        assert item.subtotal == Decimal("1500.00")

    def test_duplicate_lines_are_summed(self, product):
        order = services.place_order(checkout_data((product.pk, 2), (product.pk, 3)))

        assert order.items.get().quantity == 5
        product.refresh_from_db()
        assert product.stock == 5

    def test_oversell_rolls_everything_back(self, product, second_product):
        with pytest.raises(InsufficientStockError, match="Not enough stock for Bluetooth Speaker. Available: 3"):
            services.place_order(checkout_data((product.pk, 1), (second_product.pk, 4)))

        product.refresh_from_db()
        second_product.refresh_from_db()
        assert product.stock == 10
        assert second_product.stock == 3
        assert not Order.objects.exists()

    def test_exact_stock_can_be_bought(self, second_product):
        services.place_order(checkout_data((second_product.pk, 3)))

        second_product.refresh_from_db()
        assert second_product.stock == 0

    def test_missing_product(self, product):
        with pytest.raises(ProductUnavailableError):
            services.place_order(checkout_data((product.pk + 100, 1)))

    def test_signed_in_user_owns_order(self, product, customer):
        order = services.place_order(checkout_data((product.pk, 1)), customer)

        assert order.user == customer
        assert order.customer_key == str(customer.pk)


@pytest.mark.django_db
class TestOrderNotifications:
    def test_email_sent_after_commit(self, product, mailoutbox, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            order = services.place_order(checkout_data((product.pk, 2)))

        assert len(mailoutbox) == 1
        message = mailoutbox[0]
        assert message.to == ["orders@megashop.test"]
        assert message.subject == f"New Order #{order.pk} - MegaShop"
        assert "Wireless Headphones" in message.body

    def test_nothing_sent_before_commit(self, product, mailoutbox, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            services.place_order(checkout_data((product.pk, 1)))

        assert len(callbacks) == 1
        assert mailoutbox == []

    def test_email_failure_does_not_break_order(self, product, django_capture_on_commit_callbacks):
        with mock.patch.object(services, "send_order_email", side_effect=ConnectionError("smtp down")):
            with django_capture_on_commit_callbacks(execute=True):
                order = services.place_order(checkout_data((product.pk, 1)))

        assert Order.objects.filter(pk=order.pk).exists()

    def test_purchase_event_is_tracked(self, product, django_capture_on_commit_callbacks):
        with mock.patch.object(services, "track_purchase", return_value={"status": "success"}) as track:
            with django_capture_on_commit_callbacks(execute=True):
                order = services.place_order(checkout_data((product.pk, 1)))

        track.assert_called_once()
        assert track.call_args.args[0].pk == order.pk

    def test_no_email_without_order_address(self, product, mailoutbox, settings):
        settings.ADMIN_ORDER_EMAIL = ""
        order = services.place_order(checkout_data((product.pk, 1)))

        assert services.send_order_email(order) is False
        assert mailoutbox == []


# =============================================================================
# Checkout view
# =============================================================================


@pytest.mark.django_db
class TestCheckoutView:
    def test_guest_checkout_redirects_to_success(self, product):
        client = Client()

        response = post_checkout(client, checkout_data((product.pk, 1)))

        order = Order.objects.get()
        assert response.status_code == 302
        assert response.url == reverse("store:order-success", args=[order.pk])

    def test_form_post_with_items_as_json_text(self, product):
        client = Client()
        data = checkout_data((product.pk, 1))
        data["items"] = json.dumps(data["items"])

        client.post(reverse("store:checkout"), data)

        assert Order.objects.count() == 1

    def test_insufficient_stock_is_reported(self, product):
        client = Client()

        post_checkout(client, checkout_data((product.pk, 50)))

        assert client.session["errors"]["stock"] == "Not enough stock for Wireless Headphones. Available: 10"
        assert not Order.objects.exists()

    def test_validation_errors(self, db):
        client = Client()

        post_checkout(client, checkout_data(name="", items=[]))

        errors = client.session["errors"]
        assert "name" in errors
        assert "items" in errors

    def test_unknown_product_id(self, product):
        client = Client()

        post_checkout(client, checkout_data((999, 1)))

        assert client.session["errors"]["items"] == "The selected product is invalid: 999."

    def test_success_page_for_guest(self, product, inertia):
        client = Client()
        post_checkout(client, checkout_data((product.pk, 1)))
        order = Order.objects.get()

        response = client.get(reverse("store:order-success", args=[order.pk]), **inertia)

        props = response.json()["props"]
        assert props["order"]["total"] == "1500.00"
        assert props["flash"]["success"] == "Order placed successfully!"

    def test_success_page_hidden_from_other_users(self, product, customer, other_customer):
        order = services.place_order(checkout_data((product.pk, 1)), customer)
        client = Client()
        client.force_login(other_customer)

        response = client.get(reverse("store:order-success", args=[order.pk]))

        assert response.status_code == 403
