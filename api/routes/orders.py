"""Checkout and order management routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import Pagination, get_current_user
from domain.models import User, get_db_session
from domain.schemas.marketplace_schemas import CheckoutRequest, OrderResponse, OrderStatusUpdate
from services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger("chefsire.api.orders")


@router.post("/checkout", status_code=status.HTTP_201_CREATED)
def checkout(
    payload: CheckoutRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Buy a product; the response carries the order and its fee breakdown"""
    result = OrderService.checkout(db, user, payload)
    return {"order": OrderResponse.model_validate(result["order"]), "breakdown": result["breakdown"]}


@router.get("/mine", response_model=List[OrderResponse])
def my_purchases(
    page: Pagination = Depends(),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return OrderService.purchases(db, user.id, page.offset, page.limit)


@router.get("/sales", response_model=List[OrderResponse])
def my_sales(
    page: Pagination = Depends(),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return OrderService.sales(db, user.id, page.offset, page.limit)


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_status(
    order_id: UUID,
    payload: OrderStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return OrderService.update_status(db, user, order_id, payload.status)
