"""Order service layer (Use Cases).

Orchestrates checkout commit and admin status management.  All write
operations are atomic; the service defines the unit-of-work boundary.

Business rules enforced:
- Status transitions validated against the state machine; terminal
  states and same-status moves are rejected.
- Every transition appends a history row naming the acting admin.
- Checkout locks products (sorted by id to avoid deadlocks), deducts
  stock, snapshots prices and redeems the coupon in one transaction.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from modules.notifications.tasks import notify_order_status
from modules.orders.constants import TAX_AMOUNT, OrderStatus
from modules.orders.exceptions import (
    CustomerNotFound,
    InactiveCustomer,
    InactiveProduct,
    InsufficientStock,
    InvalidOrderStatus,
    OrderNotFound,
    ProductNotFound,
)

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.catalog.repositories.interfaces import IProductRepository
    from modules.coupons.services import CouponService
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import PlaceOrderDTO, UpdateOrderStatusDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

ZERO = Decimal("0.00")


def shipping_for(subtotal: Decimal) -> Decimal:
    """Flat fee below the free-shipping threshold, free at or above it."""
    if subtotal >= Decimal(settings.FREE_SHIPPING_THRESHOLD):
        return ZERO
    return Decimal(settings.FLAT_SHIPPING_FEE)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        customer_repository: ICustomerRepository,
        coupon_service: CouponService,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository
        self._customer_repo = customer_repository
        self._coupons = coupon_service

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def transition(
        self,
        order_id: str,
        dto: UpdateOrderStatusDTO,
        actor_id: Optional[str] = None,
    ) -> Order:
        """Move an order to ``dto.status``.

        Acquires a row-level lock (``SELECT FOR UPDATE``) on the order
        before validating the transition, so concurrent admins cannot both
        act on the same prior status.

        Raises:
            OrderNotFound: order does not exist.
            InvalidOrderStatus: transition is not allowed.
        """
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")

        new_status = dto.status
        log = logger.bind(
            order_id=str(order.id),
            current_status=order.status,
            new_status=new_status,
        )

        if not order.can_transition_to(new_status):
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Cannot transition order from {order.status} to {new_status}"
            )

        now = timezone.now()
        old_status = order.status
        order.status = new_status
        if new_status == OrderStatus.SHIPPED:
            order.shipped_at = now
        elif new_status == OrderStatus.DELIVERED:
            order.delivered_at = now
        elif new_status == OrderStatus.CANCELLED:
            order.cancelled_at = now
            order.cancellation_reason = dto.notes or ""
        if dto.notes:
            order.notes = f"{order.notes}\n{dto.notes}" if order.notes else dto.notes
        self._order_repo.save(order)

        self._order_repo.add_history(
            order_id=str(order.id),
            new_status=new_status,
            old_status=old_status,
            notes=dto.notes or "",
            changed_by=str(actor_id) if actor_id else None,
        )

        if order.customer_id:
            transaction.on_commit(
                lambda: notify_order_status.delay(str(order.id), str(new_status))
            )

        log.info("order.status_updated", actor_id=str(actor_id) if actor_id else None)
        return self.get_order(str(order.id))

    @transaction.atomic
    def place_order(self, dto: PlaceOrderDTO) -> Order:
        """Commit a checkout.

        Steps:
        1. Validate customer (when not a guest checkout).
        2. For each item (sorted by product id to avoid deadlocks):
           lock the product row, check it is active and in stock, deduct
           stock and snapshot name and price.
        3. Persist order + items, redeem the coupon against the subtotal.
        4. Record the initial status history.

        Raises:
            CustomerNotFound / InactiveCustomer: bad customer.
            ProductNotFound / InactiveProduct / InsufficientStock: bad item.
            CouponNotFound / CouponNotApplicable: coupon cannot be redeemed.
        """
        customer_id = str(dto.customer_id) if dto.customer_id else None
        log = logger.bind(customer_id=customer_id)
        log.info("order.checkout_started", item_count=len(dto.items))

        if customer_id is not None:
            customer = self._customer_repo.get_by_id(customer_id)
            if customer is None:
                raise CustomerNotFound(f"Customer {customer_id} not found.")
            if not customer.is_active:
                raise InactiveCustomer(f"Customer {customer_id} is inactive.")

        snapshots = []
        subtotal = ZERO
        for item in sorted(dto.items, key=lambda i: str(i.product_id)):
            product = self._product_repo.get_for_update(str(item.product_id))
            if product is None:
                raise ProductNotFound(f"Product {item.product_id} not found.")
            if not product.is_active:
                raise InactiveProduct(f"Product {item.product_id} is inactive.")
            if product.stock_quantity < item.quantity:
                raise InsufficientStock(
                    f"Product {product.sku}: requested {item.quantity}, "
                    f"available {product.stock_quantity}."
                )

            product.stock_quantity -= item.quantity
            self._product_repo.save(product)
            log.info(
                "order.stock_deducted",
                product_id=str(product.id),
                quantity=item.quantity,
                remaining=product.stock_quantity,
            )

            unit_price = product.effective_price
            subtotal += unit_price * item.quantity
            snapshots.append(
                {
                    "product_id": product.id,
                    "product_name": product.name,
                    "variant_name": item.variant_name,
                    "quantity": item.quantity,
                    "unit_price": unit_price,
                }
            )

        shipping = shipping_for(subtotal)
        order = self._order_repo.create(
            {
                "customer_id": customer_id,
                "subtotal": subtotal,
                "shipping_amount": shipping,
                "tax_amount": TAX_AMOUNT,
                "total_amount": subtotal + shipping + TAX_AMOUNT,
                "shipping_address": dto.shipping_address,
                "billing_address": dto.billing_address or dto.shipping_address,
                "payment_method": dto.payment_method,
                "notes": dto.notes,
            },
            snapshots,
        )

        if dto.coupon_code:
            quote = self._coupons.redeem(
                dto.coupon_code, subtotal, customer_id, str(order.id)
            )
            order.coupon = quote.coupon
            order.discount_amount = quote.discount
            order.total_amount = subtotal - quote.discount + shipping + TAX_AMOUNT
            self._order_repo.save(order)

        self._order_repo.add_history(
            order_id=str(order.id),
            new_status=order.status,
            notes="Order placed",
        )

        log.info(
            "order.placed",
            order_id=str(order.id),
            order_number=order.order_number,
            total=str(order.total_amount),
        )
        return self.get_order(str(order.id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order with items and history.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet:
        """Return orders newest first, optionally filtered."""
        return self._order_repo.list(filters)
