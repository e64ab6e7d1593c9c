from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from decimal import Decimal
from uuid import UUID
import re

from domain.enums import (
    DeliveryMethod,
    OrderStatus,
    ProductCategory,
    SubscriptionTier,
)

HANDLE_RE = re.compile(r"^[a-z0-9-]{3,40}$")


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    category: ProductCategory
    images: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    inventory: int = Field(0, ge=0)
    shipping_enabled: bool = True
    local_pickup_enabled: bool = False
    shipping_cost: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    pickup_location: Optional[str] = None
    location: Optional[str] = None

    model_config = {"str_strip_whitespace": True}


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    category: Optional[ProductCategory] = None
    images: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    inventory: Optional[int] = Field(None, ge=0)
    shipping_enabled: Optional[bool] = None
    local_pickup_enabled: Optional[bool] = None
    shipping_cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    pickup_location: Optional[str] = None
    location: Optional[str] = None
    is_active: Optional[bool] = None

    model_config = {"str_strip_whitespace": True}


class ProductResponse(BaseModel):
    id: UUID
    seller_id: UUID
    name: str
    description: Optional[str] = None
    price: Decimal
    category: str
    images: List[str]
    tags: List[str]
    inventory: int
    shipping_enabled: bool
    local_pickup_enabled: bool
    shipping_cost: Decimal
    pickup_location: Optional[str] = None
    location: Optional[str] = None
    is_active: bool
    views_count: int
    sales_count: int
    created_at: datetime

    model_config = {"from_attributes": True}


class ProductListResponse(BaseModel):
    products: List[ProductResponse]
    total: int


class SellerAnalyticsResponse(BaseModel):
    total_products: int
    active_products: int
    total_views: int
    total_sales: int
    monthly_revenue: Decimal
    subscription_tier: str
    product_limit: Optional[int] = None
    products_remaining: Optional[int] = None


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


class StoreCreate(BaseModel):
    handle: str
    name: str = Field(..., min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=1000)
    theme: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"str_strip_whitespace": True}

    @field_validator("handle")
    def validate_handle(cls, v):
        v = v.lower()
        if not HANDLE_RE.match(v):
            raise ValueError("handle must be 3-40 characters of a-z, 0-9 or '-'")
        return v


class StoreUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=1000)
    theme: Optional[Dict[str, Any]] = None

    model_config = {"str_strip_whitespace": True}


class StoreLayoutUpdate(BaseModel):
    layout: Dict[str, Any]


class StoreResponse(BaseModel):
    id: UUID
    user_id: UUID
    handle: str
    name: str
    bio: Optional[str] = None
    theme: Dict[str, Any]
    layout: Optional[Dict[str, Any]] = None
    published: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------


class TierChangeRequest(BaseModel):
    tier: SubscriptionTier


class CommissionRequest(BaseModel):
    amount: Decimal
    tier: Optional[SubscriptionTier] = None
    delivery_method: DeliveryMethod = DeliveryMethod.SHIPPED
    category: Optional[ProductCategory] = None


class SubscriptionHistoryResponse(BaseModel):
    id: UUID
    tier: str
    amount: Decimal
    status: str
    start_date: datetime
    end_date: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


class ShippingAddress(BaseModel):
    name: str = Field(..., min_length=1)
    line1: str = Field(..., min_length=1)
    line2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: Optional[str] = None
    postal_code: str = Field(..., min_length=1)
    country: str = "US"

    model_config = {"str_strip_whitespace": True}


class CheckoutRequest(BaseModel):
    product_id: UUID
    quantity: int = Field(1, ge=1, le=100)
    fulfillment_method: DeliveryMethod = DeliveryMethod.SHIPPED
    shipping_address: Optional[ShippingAddress] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderResponse(BaseModel):
    id: UUID
    buyer_id: UUID
    seller_id: UUID
    product_id: UUID
    quantity: int
    unit_price: Decimal
    shipping_cost: Decimal
    total_amount: Decimal
    platform_fee: Decimal
    seller_amount: Decimal
    commission_rate: Decimal
    fulfillment_method: str
    shipping_address: Optional[Dict[str, Any]] = None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
