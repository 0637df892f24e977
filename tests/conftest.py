from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from rest_framework.test import APIClient

from modules.accounts.constants import AdminRole
from modules.accounts.models import AdminUser
from modules.accounts.tokens import issue_admin_token
from modules.catalog.models import Category, Product
from modules.catalog.repositories.django_repository import ProductDjangoRepository
from modules.coupons.constants import DiscountType
from modules.coupons.models import Coupon
from modules.coupons.repositories.django_repository import CouponDjangoRepository
from modules.coupons.services import CouponService
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import PlaceOrderDTO, PlaceOrderItemDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


def _make_admin(email, role):
    admin = AdminUser(email=email, name="Console Admin", role=role)
    admin.set_password(ADMIN_PASSWORD)
    admin.save()
    return admin


@pytest.fixture()
def admin_password():
    return ADMIN_PASSWORD


@pytest.fixture()
def admin_user():
    return _make_admin("owner@example.com", AdminRole.SUPER_ADMIN)


@pytest.fixture()
def manager_user():
    return _make_admin("manager@example.com", AdminRole.MANAGER)


@pytest.fixture()
def auth_client(admin_user):
    """APIClient carrying a super admin bearer token."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_admin_token(admin_user)}")
    return client


@pytest.fixture()
def manager_client(manager_user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_admin_token(manager_user)}")
    return client


# ---------------------------------------------------------------------------
# Domain data
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer():
    return Customer.objects.create(
        name="Ana Souza",
        email="ana@example.com",
        device_id="device-ana",
        push_player_id="player-ana",
        is_guest=False,
    )


@pytest.fixture()
def guest_customer():
    return Customer.objects.create(name="Guest", device_id="device-guest", is_guest=True)


@pytest.fixture()
def category():
    return Category.objects.create(name="Electronics", slug="electronics")


@pytest.fixture()
def make_product(category):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        data = {
            "sku": f"SKU-{n:03d}",
            "name": f"Product {n:03d}",
            "slug": f"product-{n:03d}",
            "short_description": "A product",
            "base_price": Decimal("20.00"),
            "category": category,
            "stock_quantity": 50,
        }
        data.update(overrides)
        return Product.objects.create(**data)

    return _make


@pytest.fixture()
def product(make_product):
    return make_product(name="Wireless Earbuds", base_price=Decimal("25.00"))


@pytest.fixture()
def make_coupon():
    def _make(**overrides):
        now = timezone.now()
        data = {
            "code": "SAVE10",
            "discount_type": DiscountType.PERCENTAGE,
            "discount_value": Decimal("10"),
            "minimum_purchase": Decimal("50"),
            "maximum_discount": Decimal("20"),
            "starts_at": now - timedelta(days=1),
            "ends_at": now + timedelta(days=30),
        }
        data.update(overrides)
        return Coupon.objects.create(**data)

    return _make


@pytest.fixture()
def coupon_service():
    return CouponService(repository=CouponDjangoRepository())


@pytest.fixture()
def order_service(coupon_service):
    return OrderService(
        order_repository=OrderDjangoRepository(),
        product_repository=ProductDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
        coupon_service=coupon_service,
    )


@pytest.fixture()
def placed_order(order_service, customer, product):
    """A two-unit order for ``product`` in PLACED status."""
    dto = PlaceOrderDTO(
        customer_id=customer.id,
        items=[PlaceOrderItemDTO(product_id=product.id, quantity=2)],
        shipping_address={"line1": "1 Main Street", "city": "Springfield"},
    )
    return order_service.place_order(dto)
