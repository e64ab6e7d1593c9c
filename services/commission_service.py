"""
Subscription tier table and marketplace commission calculator.

One table drives plan pricing, product limits and platform fees so the
subscription pages, product limits and checkout never disagree.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Union

from domain.enums import (
    DIGITAL_CATEGORIES,
    DeliveryMethod,
    ProductCategory,
    SubscriptionTier,
)

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class TierPlan:
    tier: SubscriptionTier
    name: str
    price: Decimal
    shipped_rate: Decimal
    pickup_rate: Decimal
    in_store_rate: Decimal
    digital_rate: Decimal
    max_products: Optional[int]  # None = unlimited
    store_builder: bool
    analytics: bool
    priority_support: bool
    features: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "tier": self.tier.value,
            "name": self.name,
            "price": str(self.price),
            "commission_percent": int(self.shipped_rate * 100),
            "rates": {
                "shipped": str(self.shipped_rate),
                "pickup": str(self.pickup_rate),
                "in_store": str(self.in_store_rate),
                "digital": str(self.digital_rate),
            },
            "features": list(self.features),
            "limits": {
                "max_products": self.max_products,
                "store_builder": self.store_builder,
                "analytics": self.analytics,
                "priority_support": self.priority_support,
            },
        }


TIER_PLANS: Dict[SubscriptionTier, TierPlan] = {
    SubscriptionTier.FREE: TierPlan(
        tier=SubscriptionTier.FREE,
        name="Free",
        price=Decimal("0"),
        shipped_rate=Decimal("0.10"),
        pickup_rate=Decimal("0"),
        in_store_rate=Decimal("0"),
        digital_rate=Decimal("0.10"),
        max_products=5,
        store_builder=False,
        analytics=False,
        priority_support=False,
        features=[
            "List up to 5 products",
            "10% commission on shipped sales",
            "Basic product listings",
            "Community support",
        ],
    ),
    SubscriptionTier.STARTER: TierPlan(
        tier=SubscriptionTier.STARTER,
        name="Starter",
        price=Decimal("15"),
        shipped_rate=Decimal("0.08"),
        pickup_rate=Decimal("0"),
        in_store_rate=Decimal("0"),
        digital_rate=Decimal("0.05"),
        max_products=50,
        store_builder=True,
        analytics=True,
        priority_support=False,
        features=[
            "List up to 50 products",
            "8% commission on shipped sales",
            "Custom store page",
            "Basic analytics",
            "Email support",
        ],
    ),
    SubscriptionTier.PROFESSIONAL: TierPlan(
        tier=SubscriptionTier.PROFESSIONAL,
        name="Professional",
        price=Decimal("35"),
        shipped_rate=Decimal("0.05"),
        pickup_rate=Decimal("0"),
        in_store_rate=Decimal("0"),
        digital_rate=Decimal("0.03"),
        max_products=None,
        store_builder=True,
        analytics=True,
        priority_support=False,
        features=[
            "Unlimited products",
            "5% commission on shipped sales",
            "Full store builder",
            "Advanced analytics",
            "Priority email support",
        ],
    ),
    SubscriptionTier.ENTERPRISE: TierPlan(
        tier=SubscriptionTier.ENTERPRISE,
        name="Enterprise",
        price=Decimal("75"),
        shipped_rate=Decimal("0.03"),
        pickup_rate=Decimal("0"),
        in_store_rate=Decimal("0"),
        digital_rate=Decimal("0"),
        max_products=None,
        store_builder=True,
        analytics=True,
        priority_support=True,
        features=[
            "Unlimited products",
            "3% commission on shipped sales",
            "Full store builder",
            "Advanced analytics",
            "Priority phone support",
            "API access",
        ],
    ),
    SubscriptionTier.PREMIUM_PLUS: TierPlan(
        tier=SubscriptionTier.PREMIUM_PLUS,
        name="Premium Plus",
        price=Decimal("150"),
        shipped_rate=Decimal("0.01"),
        pickup_rate=Decimal("0"),
        in_store_rate=Decimal("0"),
        digital_rate=Decimal("0"),
        max_products=None,
        store_builder=True,
        analytics=True,
        priority_support=True,
        features=[
            "Unlimited products",
            "1% commission on shipped sales",
            "White-label options",
            "Dedicated account manager",
            "API access",
        ],
    ),
}

TIER_ORDER: List[SubscriptionTier] = list(TIER_PLANS)


def coerce_tier(tier: Union[str, SubscriptionTier, None]) -> SubscriptionTier:
    """Unknown or missing tiers are treated as free"""
    try:
        return SubscriptionTier(tier or SubscriptionTier.FREE)
    except ValueError:
        return SubscriptionTier.FREE


def tier_rank(tier: Union[str, SubscriptionTier, None]) -> int:
    return TIER_ORDER.index(coerce_tier(tier))


def get_plan(tier: Union[str, SubscriptionTier, None]) -> TierPlan:
    return TIER_PLANS[coerce_tier(tier)]


def _round(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def get_commission_rate(
    tier: Union[str, SubscriptionTier, None],
    delivery_method: Union[str, DeliveryMethod] = DeliveryMethod.SHIPPED,
    category: Union[str, ProductCategory, None] = None,
) -> Decimal:
    """
    Platform fee rate for a sale.

    Digital goods (digital, cookbooks, courses) always use the digital rate;
    physical goods use the rate of their delivery method.
    """
    plan = get_plan(tier)
    if category is not None:
        try:
            if ProductCategory(category) in DIGITAL_CATEGORIES:
                return plan.digital_rate
        except ValueError:
            pass

    try:
        method = DeliveryMethod(delivery_method)
    except ValueError:
        method = DeliveryMethod.SHIPPED
    return {
        DeliveryMethod.SHIPPED: plan.shipped_rate,
        DeliveryMethod.PICKUP: plan.pickup_rate,
        DeliveryMethod.IN_STORE: plan.in_store_rate,
        DeliveryMethod.DIGITAL: plan.digital_rate,
    }[method]


def calculate_commission(
    amount: Union[Decimal, float, int, str],
    tier: Union[str, SubscriptionTier, None],
    delivery_method: Union[str, DeliveryMethod] = DeliveryMethod.SHIPPED,
    category: Union[str, ProductCategory, None] = None,
) -> Dict[str, Decimal]:
    """
    Split a sale amount into platform fee and seller payout.

    Returns:
        Dict with ``rate``, ``platform_fee`` and ``seller_amount``; money
        values are rounded half-up to cents.
    """
    amount = Decimal(str(amount))
    rate = get_commission_rate(tier, delivery_method, category)
    platform_fee = _round(amount * rate)
    seller_amount = _round(amount - platform_fee)
    return {
        "rate": rate,
        "platform_fee": platform_fee,
        "seller_amount": seller_amount,
    }


def can_add_product(current_count: int, tier: Union[str, SubscriptionTier, None]) -> bool:
    max_products = get_plan(tier).max_products
    if max_products is None:
        return True
    return current_count < max_products
