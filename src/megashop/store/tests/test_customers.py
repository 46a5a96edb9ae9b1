"""Tests for the admin customer list and detail pages."""

from decimal import Decimal

import pytest
from django.urls import reverse

from megashop.store.customers import normalize_key
from megashop.store.models import Order


def make_order(user=None, mobile="01711000000", total="100.00", name="Guest Buyer"):
    return Order.objects.create(
        user=user,
        name=name,
        email="",
        shipping_address="Dhaka",
        mobile=mobile,
        total=Decimal(total),
    )


@pytest.fixture
def orders(db, customer):
    make_order(customer, mobile="01900000000", total="500.00", name="Rahim Uddin")
    make_order(customer, mobile="01900000000", total="300.00", name="Rahim Uddin")
    make_order(None, mobile="01711000000", total="50.00")
    make_order(None, mobile="01711000000", total="150.00")
    make_order(None, mobile="01522222222", total="20.00", name="Walk In")


@pytest.mark.django_db
class TestCustomerList:
    def test_groups_orders_by_customer(self, admin_client, orders, customer, inertia):
        props = admin_client.get(reverse("store:admin-customer-list"), **inertia).json()["props"]

        rows = {row["customer_id"]: row for row in props["customers"]["data"]}
        assert props["customers"]["total"] == 3
        assert rows[str(customer.pk)]["order_count"] == 2
        assert rows[str(customer.pk)]["customer_type"] == "registered"
        assert Decimal(rows["guest_01711000000"]["total_spent"]) == Decimal("200")
        assert rows["guest_01711000000"]["customer_type"] == "guest"

    def test_type_filter(self, admin_client, orders, inertia):
        props = admin_client.get(
            reverse("store:admin-customer-list"), {"type": "guest"}, **inertia
        ).json()["props"]

        assert {row["customer_type"] for row in props["customers"]["data"]} == {"guest"}
        assert props["customers"]["total"] == 2

    def test_sort_by_total_spent(self, admin_client, orders, customer, inertia):
        props = admin_client.get(
            reverse("store:admin-customer-list"),
            {"sort_by": "total_spent", "sort_direction": "asc"},
            **inertia,
        ).json()["props"]

        keys = [row["customer_id"] for row in props["customers"]["data"]]
        assert keys == ["guest_01522222222", "guest_01711000000", str(customer.pk)]

    def test_search(self, admin_client, orders, inertia):
        props = admin_client.get(
            reverse("store:admin-customer-list"), {"search": "Walk"}, **inertia
        ).json()["props"]

        assert [row["customer_id"] for row in props["customers"]["data"]] == ["guest_01522222222"]


@pytest.mark.django_db
class TestCustomerDetail:
    def test_registered_customer_stats(self, admin_client, orders, customer, inertia):
        props = admin_client.get(
            reverse("store:admin-customer-detail", args=[str(customer.pk)]), **inertia
        ).json()["props"]

        assert props["customer"]["type"] == "registered"
        assert props["customer"]["mobile"] == "01900000000"
        assert props["stats"]["total_orders"] == 2
        assert Decimal(props["stats"]["total_spent"]) == Decimal("800.00")
        assert Decimal(str(props["stats"]["average_order_value"])) == Decimal("400")

    def test_guest_customer(self, admin_client, orders, inertia):
        props = admin_client.get(
            reverse("store:admin-customer-detail", args=["guest_01711000000"]), **inertia
        ).json()["props"]

        assert props["customer"]["type"] == "guest"
        assert props["orders"]["total"] == 2

    def test_unknown_guest_redirects_with_error(self, admin_client, db):
        response = admin_client.get(reverse("store:admin-customer-detail", args=["guest_000"]))

        assert response.status_code == 302
        assert response.url == reverse("store:admin-customer-list")

    def test_unknown_user_is_404(self, admin_client, db):
        response = admin_client.get(reverse("store:admin-customer-detail", args=["not-a-uuid"]))

        assert response.status_code == 404


def test_normalize_key_dashes_hex_uuid():
    assert normalize_key("12345678123456781234567812345678") == "12345678-1234-5678-1234-567812345678"
    assert normalize_key("guest_0171") == "guest_0171"
