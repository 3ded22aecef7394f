from __future__ import annotations

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.delivery.constants import DeliveryMethodType
from modules.delivery.models import DeliveryMethod, DeliverySlot
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.views import build_order_service
from modules.payments.models import PaymentMethod
from modules.products.models import Category, Product
from modules.shipping.dtos import ShippingAddressDTO
from modules.stores.models import Shop, Site

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = User.objects.create_user(username="operator", password="testpass123")
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Master data
# ---------------------------------------------------------------------------


@pytest.fixture()
def site():
    return Site.objects.create(code="MAIN", name="Main Store")


@pytest.fixture()
def shop(site):
    return Shop.objects.create(site=site, code="TKY-01", name="Tokyo Shibuya")


@pytest.fixture()
def customer():
    return Customer.objects.create(
        name="Aiko Tanaka", email="aiko@example.com", phone="090-1111-2222"
    )


@pytest.fixture()
def category():
    return Category.objects.create(name="Tea")


@pytest.fixture()
def product(category):
    return Product.objects.create(
        code="TEA-001",
        name="Sencha 100g",
        category=category,
        retail_price=Decimal("1200.00"),
        purchase_price=Decimal("700.00"),
    )


@pytest.fixture()
def payment_method():
    return PaymentMethod.objects.create(name="Credit card", code="CARD")


@pytest.fixture()
def delivery_method():
    return DeliveryMethod.objects.create(
        name="Standard delivery", code="STD", type=DeliveryMethodType.STANDARD
    )


@pytest.fixture()
def delivery_slot(delivery_method):
    return DeliverySlot.objects.create(
        delivery_method=delivery_method, name="14:00-16:00", code="14-16"
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


@pytest.fixture()
def order_service():
    return build_order_service()


@pytest.fixture()
def make_order_dto(
    customer, site, shop, payment_method, delivery_method, delivery_slot, product
):
    """Build a valid ``CreateOrderDTO``; keyword arguments override fields."""

    def _make(**overrides) -> CreateOrderDTO:
        data = {
            "customer_id": customer.id,
            "site_id": site.id,
            "shop_id": shop.id,
            "payment_method_id": payment_method.id,
            "delivery_method_id": delivery_method.id,
            "delivery_slot_id": delivery_slot.id,
            "shipping_address": ShippingAddressDTO(
                name="Aiko Tanaka",
                postal_code="150-0002",
                prefecture="Tokyo",
                address_line="2-21-1 Shibuya",
            ),
            "items": [
                CreateOrderItemDTO(
                    product_id=product.id, quantity=2, unit_price=Decimal("1000")
                )
            ],
            "total_amount": Decimal("2000"),
            "billing_amount": Decimal("2000"),
        }
        data.update(overrides)
        return CreateOrderDTO(**data)

    return _make


@pytest.fixture()
def order(order_service, make_order_dto):
    return order_service.create_order(make_order_dto())


@pytest.fixture()
def order_payload(
    customer, site, shop, payment_method, delivery_method, delivery_slot, product
):
    """JSON body accepted by ``POST /api/v1/orders/``."""
    return {
        "customer_id": str(customer.id),
        "site_id": str(site.id),
        "shop_id": str(shop.id),
        "payment_method_id": str(payment_method.id),
        "delivery_method_id": str(delivery_method.id),
        "delivery_slot_id": str(delivery_slot.id),
        "shipping_address": {
            "name": "Aiko Tanaka",
            "postal_code": "150-0002",
            "prefecture": "Tokyo",
            "address_line": "2-21-1 Shibuya",
        },
        "items": [
            {"product_id": str(product.id), "quantity": 2, "unit_price": "1000.00"}
        ],
        "total_amount": "2000.00",
        "billing_amount": "2000.00",
    }
