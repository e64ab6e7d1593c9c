"""
Tests for the tier table and the commission calculator.

The calculator is pure, so most checks call it directly; the last few go
through the public /subscriptions/calculate-commission endpoint.
"""

from decimal import Decimal

import pytest

from test_fixtures import API, auth_headers, client, db_session, make_user
from domain.enums import DeliveryMethod, ProductCategory, SubscriptionTier
from services import commission_service as commissions


@pytest.mark.parametrize(
    "tier,expected_fee",
    [
        (SubscriptionTier.FREE, Decimal("10.00")),
        (SubscriptionTier.STARTER, Decimal("8.00")),
        (SubscriptionTier.PROFESSIONAL, Decimal("5.00")),
        (SubscriptionTier.ENTERPRISE, Decimal("3.00")),
        (SubscriptionTier.PREMIUM_PLUS, Decimal("1.00")),
    ],
)
def test_shipped_fee_per_tier(tier, expected_fee):
    result = commissions.calculate_commission(Decimal("100"), tier)
    assert result["platform_fee"] == expected_fee
    assert result["seller_amount"] == Decimal("100") - expected_fee


def test_pickup_and_in_store_are_free_on_every_tier():
    for tier in SubscriptionTier:
        for method in (DeliveryMethod.PICKUP, DeliveryMethod.IN_STORE):
            result = commissions.calculate_commission("80.00", tier, method)
            assert result["platform_fee"] == Decimal("0.00")
            assert result["seller_amount"] == Decimal("80.00")


def test_digital_categories_use_digital_rate_even_when_shipped():
    assert commissions.get_commission_rate(
        SubscriptionTier.STARTER, DeliveryMethod.SHIPPED, ProductCategory.COOKBOOKS
    ) == Decimal("0.05")
    assert commissions.get_commission_rate(
        SubscriptionTier.ENTERPRISE, DeliveryMethod.SHIPPED, ProductCategory.COURSES
    ) == Decimal("0")
    assert commissions.get_commission_rate(
        SubscriptionTier.STARTER, DeliveryMethod.SHIPPED, ProductCategory.SPICES
    ) == Decimal("0.08")


def test_fee_rounds_half_up_and_parts_add_up():
    # 8% of 12.5625 = 1.005 -> 1.01
    result = commissions.calculate_commission("12.5625", SubscriptionTier.STARTER)
    assert result["platform_fee"] == Decimal("1.01")
    assert result["seller_amount"] == Decimal("11.55")

    result = commissions.calculate_commission("49.99", SubscriptionTier.FREE)
    assert result["platform_fee"] == Decimal("5.00")
    assert result["platform_fee"] + result["seller_amount"] == Decimal("49.99")


def test_unknown_tier_falls_back_to_free():
    assert commissions.coerce_tier("gold") is SubscriptionTier.FREE
    assert commissions.coerce_tier(None) is SubscriptionTier.FREE
    assert commissions.get_plan("gold").max_products == 5


def test_product_limits():
    assert commissions.can_add_product(4, SubscriptionTier.FREE)
    assert not commissions.can_add_product(5, SubscriptionTier.FREE)
    assert commissions.can_add_product(49, SubscriptionTier.STARTER)
    assert not commissions.can_add_product(50, SubscriptionTier.STARTER)
    assert commissions.can_add_product(10_000, SubscriptionTier.PROFESSIONAL)


def test_tier_listing():
    r = client.get(f"{API}/subscriptions/tiers")
    assert r.status_code == 200
    tiers = r.json()["tiers"]
    assert [t["tier"] for t in tiers] == [
        "free",
        "starter",
        "professional",
        "enterprise",
        "premium_plus",
    ]
    assert tiers[0]["limits"]["max_products"] == 5
    assert tiers[2]["limits"]["max_products"] is None
    assert tiers[1]["commission_percent"] == 8


def test_quote_endpoint_with_explicit_tier():
    r = client.post(
        f"{API}/subscriptions/calculate-commission",
        json={"amount": "100", "tier": "professional", "delivery_method": "shipped"},
    )
    assert r.status_code == 200
    assert r.json() == {
        "sale_amount": "100",
        "tier": "professional",
        "delivery_method": "shipped",
        "commission_rate": "0.05",
        "platform_fee": "5.00",
        "seller_amount": "95.00",
    }


def test_quote_uses_caller_tier_or_free(db_session):
    starter = make_user(db_session, "seller")
    client.post(
        f"{API}/subscriptions/upgrade", json={"tier": "starter"}, headers=auth_headers(starter)
    )

    mine = client.post(
        f"{API}/subscriptions/calculate-commission",
        json={"amount": "50"},
        headers=auth_headers(starter),
    ).json()
    anonymous = client.post(f"{API}/subscriptions/calculate-commission", json={"amount": "50"}).json()

    assert mine["tier"] == "starter"
    assert mine["platform_fee"] == "4.00"
    assert anonymous["tier"] == "free"
    assert anonymous["platform_fee"] == "5.00"


def test_quote_rejects_non_positive_amount():
    r = client.post(f"{API}/subscriptions/calculate-commission", json={"amount": "0"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_AMOUNT"
