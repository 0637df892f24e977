from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from config.celery import app as celery_app
from decouple import config
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.accounts.constants import AdminRole
from modules.accounts.dtos import CreateAdminDTO
from modules.accounts.exceptions import AdminAlreadyExists
from modules.accounts.repositories.django_repository import AdminUserDjangoRepository
from modules.accounts.services import AdminAuthService
from modules.catalog.models import Category, Product
from modules.catalog.repositories.django_repository import ProductDjangoRepository
from modules.coupons.constants import DiscountType
from modules.coupons.dtos import CreateCouponDTO
from modules.coupons.exceptions import CouponAlreadyExists, CouponNotApplicable
from modules.coupons.repositories.django_repository import CouponDjangoRepository
from modules.coupons.services import CouponService
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.constants import STATUS_SEQUENCE, OrderStatus
from modules.orders.dtos import PlaceOrderDTO, PlaceOrderItemDTO, UpdateOrderStatusDTO
from modules.orders.exceptions import InsufficientStock
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.reviews.models import Review
from modules.reviews.repositories.django_repository import ReviewDjangoRepository
from modules.reviews.services import ReviewService

CATEGORIES = [
    ("Electronics", "electronics"),
    ("Home & Kitchen", "home-kitchen"),
    ("Stationery", "stationery"),
]

PRODUCTS = [
    ("ELEC-001", "Wireless Earbuds", "electronics", Decimal("59.90"), None),
    ("ELEC-002", "USB-C Charger 65W", "electronics", Decimal("34.90"), Decimal("29.90")),
    ("ELEC-003", "Mechanical Keyboard", "electronics", Decimal("89.00"), None),
    ("ELEC-004", "27\" Monitor", "electronics", Decimal("249.00"), Decimal("219.00")),
    ("HOME-001", "French Press", "home-kitchen", Decimal("24.50"), None),
    ("HOME-002", "Chef Knife", "home-kitchen", Decimal("45.00"), None),
    ("HOME-003", "Cast Iron Skillet", "home-kitchen", Decimal("39.90"), Decimal("34.90")),
    ("STAT-001", "A5 Notebook", "stationery", Decimal("7.90"), None),
    ("STAT-002", "Gel Pens (10 pack)", "stationery", Decimal("9.50"), None),
    ("STAT-003", "Desk Organizer", "stationery", Decimal("19.90"), None),
]

CUSTOMERS = [
    ("Ana Souza", "ana@example.com", False),
    ("Bruno Lima", "bruno@example.com", False),
    ("Carla Mendes", "carla@example.com", False),
    ("Daniel Costa", "daniel@example.com", False),
    ("Guest", None, True),
    ("Guest", None, True),
]


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        # no worker is running during a seed; run notification tasks inline
        celery_app.conf.task_always_eager = True
        self.stdout.write("Seeding development data...")

        admin_created = self._seed_admin()
        products = self._seed_catalog()
        customers = self._seed_customers()
        coupons_created = self._seed_coupons()
        orders_created = self._seed_orders(customers, products)
        reviews_created = self._seed_reviews(customers, products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"admins={admin_created}, "
                f"products={len(products)}, "
                f"customers={len(customers)}, "
                f"coupons={coupons_created}, "
                f"orders={orders_created}, "
                f"reviews={reviews_created}"
            )
        )

    def _seed_admin(self) -> int:
        service = AdminAuthService(repository=AdminUserDjangoRepository())
        dto = CreateAdminDTO(
            email=config("SEED_ADMIN_EMAIL", default="admin@example.com"),
            password=config("SEED_ADMIN_PASSWORD", default="admin12345"),
            name="Store Owner",
            role=AdminRole.SUPER_ADMIN,
        )
        try:
            service.create_admin(dto)
        except AdminAlreadyExists:
            return 0
        return 1

    def _seed_catalog(self) -> list[Product]:
        self.stdout.write("Creating catalog...")
        categories = {}
        for order, (name, slug) in enumerate(CATEGORIES):
            category, _ = Category.objects.get_or_create(
                slug=slug, defaults={"name": name, "display_order": order}
            )
            categories[slug] = category

        products: list[Product] = []
        for sku, name, category_slug, base_price, sale_price in PRODUCTS:
            product, _ = Product.objects.get_or_create(
                sku=sku,
                defaults={
                    "name": name,
                    "slug": sku.lower(),
                    "short_description": name,
                    "base_price": base_price,
                    "sale_price": sale_price,
                    "category": categories[category_slug],
                    "stock_quantity": random.randint(5, 200),
                    "is_featured": random.random() < 0.3,
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating catalog... Done!"))
        return products

    def _seed_customers(self) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers: list[Customer] = []
        for index, (name, email, is_guest) in enumerate(CUSTOMERS):
            customer, _ = Customer.objects.get_or_create(
                device_id=f"seed-device-{index}",
                defaults={
                    "name": name,
                    "email": email,
                    "is_guest": is_guest,
                    "push_player_id": f"seed-player-{index}" if index % 2 == 0 else "",
                },
            )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_coupons(self) -> int:
        service = CouponService(repository=CouponDjangoRepository())
        now = timezone.now()
        coupons = [
            CreateCouponDTO(
                code="SAVE10",
                description="10% off orders above 50",
                discount_type=DiscountType.PERCENTAGE,
                discount_value=Decimal("10"),
                minimum_purchase=Decimal("50"),
                maximum_discount=Decimal("20"),
                starts_at=now - timedelta(days=30),
                ends_at=now + timedelta(days=60),
            ),
            CreateCouponDTO(
                code="WELCOME5",
                description="5 off your first order",
                discount_type=DiscountType.FIXED,
                discount_value=Decimal("5"),
                usage_limit=100,
                starts_at=now - timedelta(days=30),
                ends_at=now + timedelta(days=365),
            ),
        ]
        created = 0
        for dto in coupons:
            try:
                service.create_coupon(dto)
            except CouponAlreadyExists:
                continue
            created += 1
        return created

    def _seed_orders(self, customers: list[Customer], products: list[Product]) -> int:
        self.stdout.write("Creating orders...")
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            coupon_service=CouponService(repository=CouponDjangoRepository()),
        )
        created = 0
        for _ in range(25):
            customer = random.choice(customers)
            picked = random.sample(products, k=random.randint(1, 3))
            dto = PlaceOrderDTO(
                customer_id=customer.id,
                items=[
                    PlaceOrderItemDTO(product_id=p.id, quantity=random.randint(1, 2))
                    for p in picked
                ],
                coupon_code=random.choice([None, None, "SAVE10", "WELCOME5"]),
                shipping_address={"line1": "1 Seed Street", "city": "Springfield"},
            )
            try:
                order = service.place_order(dto)
            except (InsufficientStock, CouponNotApplicable):
                continue

            target = random.choice(STATUS_SEQUENCE + (OrderStatus.CANCELLED,))
            if target != order.status:
                service.transition(
                    str(order.id), UpdateOrderStatusDTO(status=target, notes="Seeded")
                )
            created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return created

    def _seed_reviews(self, customers: list[Customer], products: list[Product]) -> int:
        if Review.objects.exists():
            return 0
        service = ReviewService(
            repository=ReviewDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        created = 0
        registered = [c for c in customers if not c.is_guest]
        for product in products[:6]:
            for customer in random.sample(registered, k=2):
                review = Review.objects.create(
                    product=product,
                    customer=customer,
                    rating=random.randint(2, 5),
                    title="Seeded review",
                    content=f"Thoughts on {product.name}.",
                )
                if random.random() < 0.7:
                    service.approve(str(review.id))
                created += 1
        return created
