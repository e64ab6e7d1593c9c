from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from decimal import Decimal
import logging

from domain.enums import ProductCategory, SubscriptionStatus, SubscriptionTier, DeliveryMethod
from domain.models import SubscriptionHistory, User, utcnow
from repositories import ProductRepository, SubscriptionHistoryRepository
from services import commission_service as commissions
from app.exceptions import ServiceValidationError

logger = logging.getLogger("chefsire.subscriptions")

BILLING_PERIOD = timedelta(days=30)


class SubscriptionService:
    @staticmethod
    def effective_tier(user: User, now: Optional[datetime] = None) -> SubscriptionTier:
        """
        Tier that currently applies to the user.

        A paid plan keeps working until ``subscription_ends_at`` even after it
        is cancelled; past that date the user is back on free.
        """
        tier = commissions.coerce_tier(user.subscription_tier)
        if tier is SubscriptionTier.FREE:
            return tier
        ends_at = user.subscription_ends_at
        if ends_at is not None and ends_at <= (now or utcnow()):
            return SubscriptionTier.FREE
        return tier

    @staticmethod
    def summary(db: Session, user: User) -> Dict[str, Any]:
        tier = SubscriptionService.effective_tier(user)
        plan = commissions.get_plan(tier)
        product_count = ProductRepository(db).count_active_for_seller(user.id)
        return {
            "tier": tier.value,
            "plan": plan.to_dict(),
            "status": user.subscription_status,
            "ends_at": user.subscription_ends_at,
            "monthly_revenue": str(user.monthly_revenue or Decimal("0")),
            "product_count": product_count,
            "product_limit": plan.max_products,
        }

    @staticmethod
    def _log_history(
        db: Session, user: User, tier: SubscriptionTier, status: str, start: datetime, end: Optional[datetime]
    ) -> None:
        db.add(
            SubscriptionHistory(
                user_id=user.id,
                tier=tier.value,
                amount=commissions.get_plan(tier).price,
                status=status,
                start_date=start,
                end_date=end,
            )
        )

    @staticmethod
    def _apply_tier(db: Session, user: User, tier: SubscriptionTier, now: datetime) -> datetime:
        ends_at = now + BILLING_PERIOD
        user.subscription_tier = tier.value
        user.subscription_status = SubscriptionStatus.ACTIVE.value
        user.subscription_ends_at = ends_at
        SubscriptionService._log_history(db, user, tier, SubscriptionStatus.ACTIVE.value, now, ends_at)
        return ends_at

    @staticmethod
    def change_tier(
        db: Session, user: User, tier: SubscriptionTier, now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Move the user onto a paid tier for a new 30-day period.

        Choosing the tier the user already has, while it is active and not
        expired, is a no-op and writes no history row.

        Returns:
            Dict with ``action`` (upgraded, downgraded, updated or unchanged),
            the new tier, the previous tier and ``ends_at``

        Raises:
            ServiceValidationError: If ``tier`` is free (use cancel instead)
        """
        now = now or utcnow()
        tier = SubscriptionTier(tier)
        if tier is SubscriptionTier.FREE:
            raise ServiceValidationError("Cancel the subscription to return to the free tier")

        previous = commissions.coerce_tier(user.subscription_tier)
        if (
            previous is tier
            and user.subscription_status == SubscriptionStatus.ACTIVE.value
            and user.subscription_ends_at is not None
            and user.subscription_ends_at > now
        ):
            return {
                "action": "unchanged",
                "message": f"You are already on {commissions.get_plan(tier).name}.",
                "tier": tier.value,
                "previous_tier": previous.value,
                "ends_at": user.subscription_ends_at,
            }

        ends_at = SubscriptionService._apply_tier(db, user, tier, now)
        db.commit()

        if commissions.tier_rank(tier) > commissions.tier_rank(previous):
            action = "upgraded"
        elif commissions.tier_rank(tier) < commissions.tier_rank(previous):
            action = "downgraded"
        else:
            action = "updated"
        logger.info("User %s %s from %s to %s", user.id, action, previous.value, tier.value)
        return {
            "action": action,
            "message": f"Successfully {action} to {commissions.get_plan(tier).name}",
            "tier": tier.value,
            "previous_tier": previous.value,
            "ends_at": ends_at,
        }

    @staticmethod
    def downgrade(
        db: Session, user: User, tier: SubscriptionTier, now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """Explicit downgrade; rejects any tier that does not rank lower"""
        current = commissions.coerce_tier(user.subscription_tier)
        if commissions.tier_rank(tier) >= commissions.tier_rank(current):
            raise ServiceValidationError(
                "Requested tier is not a downgrade",
                details={"current_tier": current.value},
                code="NOT_A_DOWNGRADE",
            )
        return SubscriptionService.change_tier(db, user, tier, now)

    @staticmethod
    def cancel(db: Session, user: User, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Mark the plan cancelled; access continues until ``ends_at``"""
        now = now or utcnow()
        tier = commissions.coerce_tier(user.subscription_tier)
        ends_at = user.subscription_ends_at or now
        user.subscription_status = SubscriptionStatus.CANCELLED.value
        SubscriptionService._log_history(db, user, tier, SubscriptionStatus.CANCELLED.value, now, ends_at)
        db.commit()
        logger.info("User %s cancelled %s subscription", user.id, tier.value)
        return {
            "message": "Subscription cancelled. You'll retain access until the end of your billing period.",
            "tier": tier.value,
            "status": user.subscription_status,
            "ends_at": ends_at,
        }

    @staticmethod
    def history(db: Session, user: User, limit: int = 25) -> List[SubscriptionHistory]:
        return SubscriptionHistoryRepository(db).for_user(user.id, limit)

    @staticmethod
    def commission_quote(
        amount: Decimal,
        tier: SubscriptionTier,
        delivery_method: DeliveryMethod = DeliveryMethod.SHIPPED,
        category: Optional[ProductCategory] = None,
    ) -> Dict[str, Any]:
        if amount is None or amount <= 0:
            raise ServiceValidationError("Invalid sale amount", code="INVALID_AMOUNT")
        result = commissions.calculate_commission(amount, tier, delivery_method, category)
        return {
            "sale_amount": str(amount),
            "tier": commissions.coerce_tier(tier).value,
            "delivery_method": DeliveryMethod(delivery_method).value,
            "commission_rate": str(result["rate"]),
            "platform_fee": f"{result['platform_fee']:.2f}",
            "seller_amount": f"{result['seller_amount']:.2f}",
        }
