from typing import Any, Dict, List
from sqlalchemy.orm import Session
from decimal import Decimal
import logging
import uuid

from domain.enums import DIGITAL_CATEGORIES, DeliveryMethod, NotificationType, OrderStatus
from domain.models import Order, User
from domain.schemas.marketplace_schemas import CheckoutRequest
from repositories import OrderRepository, ProductRepository, UserRepository
from services import commission_service as commissions
from services.notification_service import NotificationService
from services.subscription_service import SubscriptionService
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError

logger = logging.getLogger("chefsire.orders")

# Allowed status moves; anything else is rejected
TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


class OrderService:
    @staticmethod
    def _check_fulfillment(product, method: DeliveryMethod) -> None:
        digital = product.category in {c.value for c in DIGITAL_CATEGORIES}
        offered = {
            DeliveryMethod.SHIPPED: product.shipping_enabled,
            DeliveryMethod.PICKUP: product.local_pickup_enabled,
            DeliveryMethod.IN_STORE: product.local_pickup_enabled,
            DeliveryMethod.DIGITAL: digital,
        }[method]
        if not offered:
            raise ServiceValidationError(
                f"This product is not available for {method.value}",
                code="FULFILLMENT_UNAVAILABLE",
            )

    @staticmethod
    def checkout(db: Session, buyer: User, payload: CheckoutRequest) -> Dict[str, Any]:
        """
        Buy ``quantity`` units of a product.

        The commission is frozen on the order using the seller's effective
        tier at purchase time. Inventory, sales count and the seller's
        monthly revenue are updated in the same transaction.

        Returns:
            Dict with the created ``order`` and the fee ``breakdown``

        Raises:
            NotFoundError: If the product does not exist
            ServiceValidationError: For inactive products, buying your own
                product, short inventory or an unavailable fulfillment method
        """
        product = ProductRepository(db).get_by_id(payload.product_id)
        if not product:
            raise NotFoundError(f"Product {payload.product_id} not found")
        if not product.is_active:
            raise ServiceValidationError("This product is no longer available", code="PRODUCT_INACTIVE")
        if product.seller_id == buyer.id:
            raise ServiceValidationError("You cannot buy your own product", code="OWN_PRODUCT")
        if product.inventory < payload.quantity:
            raise ServiceValidationError(
                "Not enough inventory",
                details={"available": product.inventory, "requested": payload.quantity},
                code="INSUFFICIENT_INVENTORY",
            )

        method = DeliveryMethod(payload.fulfillment_method)
        OrderService._check_fulfillment(product, method)
        if method is DeliveryMethod.SHIPPED and payload.shipping_address is None:
            raise ServiceValidationError("A shipping address is required for shipped orders")

        seller = UserRepository(db).get_by_id(product.seller_id)
        tier = SubscriptionService.effective_tier(seller)

        unit_price = Decimal(product.price)
        subtotal = unit_price * payload.quantity
        shipping_cost = Decimal(product.shipping_cost or 0) if method is DeliveryMethod.SHIPPED else Decimal("0")
        fees = commissions.calculate_commission(subtotal, tier, method, product.category)
        total = subtotal + shipping_cost
        # Shipping is passed through to the seller untouched
        seller_amount = fees["seller_amount"] + shipping_cost

        products = ProductRepository(db)
        if not products.take_stock(product.id, payload.quantity):
            # Sold out between the read above and now; rollback reloads the row
            db.rollback()
            raise ServiceValidationError(
                "Not enough inventory",
                details={"available": product.inventory, "requested": payload.quantity},
                code="INSUFFICIENT_INVENTORY",
            )

        try:
            order = OrderRepository(db).add(
                Order(
                    buyer_id=buyer.id,
                    seller_id=seller.id,
                    product_id=product.id,
                    quantity=payload.quantity,
                    unit_price=unit_price,
                    shipping_cost=shipping_cost,
                    total_amount=total,
                    platform_fee=fees["platform_fee"],
                    seller_amount=seller_amount,
                    commission_rate=fees["rate"],
                    fulfillment_method=method.value,
                    shipping_address=payload.shipping_address.model_dump() if payload.shipping_address else None,
                    status=OrderStatus.PENDING.value,
                )
            )
            UserRepository(db).add_revenue(seller.id, seller_amount)
            NotificationService.notify(
                db,
                user_id=seller.id,
                actor_id=buyer.id,
                type=NotificationType.ORDER,
                title="New order",
                message=f"{buyer.display_name} ordered {payload.quantity} x {product.name}",
                data={"order_id": str(order.id), "product_id": str(product.id)},
            )
            db.commit()
            db.refresh(order)
            db.expire(product)
            db.expire(seller)
        except Exception:
            db.rollback()
            logger.exception("Checkout failed for product %s", product.id)
            raise

        logger.info(
            "Order %s: %s x %s, total %s, platform fee %s (%s)",
            order.id, payload.quantity, product.id, total, fees["platform_fee"], tier.value,
        )
        return {
            "order": order,
            "breakdown": {
                "subtotal": f"{subtotal:.2f}",
                "shipping_cost": f"{shipping_cost:.2f}",
                "total": f"{total:.2f}",
                "commission_rate": str(fees["rate"]),
                "platform_fee": f"{fees['platform_fee']:.2f}",
                "seller_amount": f"{seller_amount:.2f}",
                "seller_tier": tier.value,
            },
        }

    @staticmethod
    def purchases(db: Session, buyer_id: uuid.UUID, offset: int = 0, limit: int = 20) -> List[Order]:
        return OrderRepository(db).for_buyer(buyer_id, offset, limit)

    @staticmethod
    def sales(db: Session, seller_id: uuid.UUID, offset: int = 0, limit: int = 20) -> List[Order]:
        return OrderRepository(db).for_seller(seller_id, offset, limit)

    @staticmethod
    def update_status(db: Session, seller: User, order_id: uuid.UUID, status: OrderStatus) -> Order:
        """
        Move an order along pending -> paid -> shipped -> delivered.

        Cancelling (from pending or paid) puts the units back in stock.
        """
        repo = OrderRepository(db)
        order = repo.get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order {order_id} not found")
        if order.seller_id != seller.id:
            raise ForbiddenError("Only the seller can update this order", code="NOT_OWNER")

        current = OrderStatus(order.status)
        status = OrderStatus(status)
        if status not in TRANSITIONS[current]:
            raise ServiceValidationError(
                f"Cannot change order from {current.value} to {status.value}",
                code="INVALID_TRANSITION",
            )

        order.status = status.value
        if status is OrderStatus.CANCELLED:
            ProductRepository(db).return_stock(order.product_id, order.quantity)
            UserRepository(db).add_revenue(seller.id, -Decimal(order.seller_amount))
        logger.info("Order %s: %s -> %s", order.id, current.value, status.value)
        order = repo.update(order)
        db.expire(seller)
        return order
