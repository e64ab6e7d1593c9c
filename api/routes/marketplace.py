"""Marketplace product routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import Optional

from api.dependencies import Pagination, get_current_user
from domain.enums import ProductCategory
from domain.mappers import UserMapper
from domain.models import User, get_db_session
from domain.schemas.marketplace_schemas import (
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
    SellerAnalyticsResponse,
)
from services.marketplace_service import MarketplaceService

router = APIRouter(prefix="/marketplace", tags=["Marketplace"])
logger = logging.getLogger("chefsire.api.marketplace")


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """List a product; the seller's tier caps the number of active listings"""
    return MarketplaceService.create_product(db, user, payload)


@router.get("/products", response_model=ProductListResponse)
def list_products(
    query: Optional[str] = Query(None, description="Matches name or description"),
    category: Optional[ProductCategory] = None,
    location: Optional[str] = None,
    seller_id: Optional[UUID] = None,
    page: Pagination = Depends(),
    db: Session = Depends(get_db_session),
):
    products, total = MarketplaceService.search_products(
        db,
        query=query,
        category=category.value if category else None,
        location=location,
        seller_id=seller_id,
        offset=page.offset,
        limit=page.limit,
    )
    return ProductListResponse(
        products=[ProductResponse.model_validate(p) for p in products], total=total
    )


@router.get("/categories")
def categories(db: Session = Depends(get_db_session)):
    """Active product counts per category"""
    return MarketplaceService.category_counts(db)


@router.get("/analytics", response_model=SellerAnalyticsResponse)
def seller_analytics(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return MarketplaceService.seller_analytics(db, user)


@router.get("/sellers/{username}/storefront")
def storefront(username: str, db: Session = Depends(get_db_session)):
    data = MarketplaceService.storefront(db, username)
    return {
        "seller": UserMapper.to_public(data["seller"]),
        "products": [ProductResponse.model_validate(p) for p in data["products"]],
        "subscription_tier": data["subscription_tier"],
    }


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(product_id: UUID, db: Session = Depends(get_db_session)):
    """Fetch a product and count the view"""
    return MarketplaceService.get_product(db, product_id)


@router.patch("/products/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    payload: ProductUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return MarketplaceService.update_product(db, user, product_id, payload)


@router.delete("/products/{product_id}", response_model=ProductResponse)
def deactivate_product(
    product_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Soft delete: the listing is deactivated, orders keep pointing at it"""
    return MarketplaceService.deactivate_product(db, user, product_id)
