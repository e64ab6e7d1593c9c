"""Subscription tiers and the commission calculator"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from api.dependencies import get_current_user, get_optional_user
from domain.enums import SubscriptionTier
from domain.models import User, get_db_session
from domain.schemas.marketplace_schemas import (
    CommissionRequest,
    SubscriptionHistoryResponse,
    TierChangeRequest,
)
from services import commission_service as commissions
from services.subscription_service import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])
logger = logging.getLogger("chefsire.api.subscriptions")


@router.get("/tiers")
def list_tiers():
    """The tier table with prices, commission rates and limits"""
    return {"tiers": [plan.to_dict() for plan in commissions.TIER_PLANS.values()]}


@router.get("/me")
def my_subscription(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return SubscriptionService.summary(db, user)


@router.post("/upgrade")
def upgrade(
    payload: TierChangeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return SubscriptionService.change_tier(db, user, payload.tier)


@router.post("/downgrade")
def downgrade(
    payload: TierChangeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return SubscriptionService.downgrade(db, user, payload.tier)


@router.post("/cancel")
def cancel(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return SubscriptionService.cancel(db, user)


@router.get("/history", response_model=List[SubscriptionHistoryResponse])
def history(
    limit: int = Query(25, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return SubscriptionService.history(db, user, limit)


@router.post("/calculate-commission")
def calculate_commission(
    payload: CommissionRequest,
    viewer: Optional[User] = Depends(get_optional_user),
):
    """
    Quote the platform fee for a sale.

    Without an explicit tier the caller's current tier is used, or free for
    anonymous callers.
    """
    tier = payload.tier
    if tier is None:
        tier = SubscriptionService.effective_tier(viewer) if viewer else SubscriptionTier.FREE
    return SubscriptionService.commission_quote(
        payload.amount, tier, payload.delivery_method, payload.category
    )
