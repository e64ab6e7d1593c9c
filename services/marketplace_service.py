from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from decimal import Decimal
import logging
import uuid

from domain.enums import DIGITAL_CATEGORIES, ProductCategory
from domain.models import Product, User
from domain.schemas.marketplace_schemas import ProductCreate, ProductUpdate
from repositories import ProductRepository, RecipeRepository, UserRepository
from services import commission_service as commissions
from services.subscription_service import SubscriptionService
from services.pantry_service import ingredient_key
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError

logger = logging.getLogger("chefsire.marketplace")


class MarketplaceService:
    @staticmethod
    def create_product(db: Session, seller: User, payload: ProductCreate) -> Product:
        """
        List a new product for ``seller``.

        The seller's effective subscription tier caps how many active products
        they may have.

        Raises:
            ForbiddenError: ``tier_limit_reached`` when the cap is hit
            ServiceValidationError: If the product offers no way to receive it
        """
        repo = ProductRepository(db)
        tier = SubscriptionService.effective_tier(seller)
        current = repo.count_active_for_seller(seller.id)
        if not commissions.can_add_product(current, tier):
            limit = commissions.get_plan(tier).max_products
            logger.info(
                "Seller %s hit the %s product limit (%s/%s)", seller.id, tier.value, current, limit
            )
            raise ForbiddenError(
                f"Your {commissions.get_plan(tier).name} plan allows {limit} active products. "
                "Upgrade to list more.",
                details={"tier": tier.value, "current_count": current, "limit": limit},
                code="tier_limit_reached",
            )

        offers_delivery = payload.shipping_enabled or payload.local_pickup_enabled
        if payload.category not in DIGITAL_CATEGORIES and not offers_delivery:
            raise ServiceValidationError("Enable shipping or local pickup for physical products")

        data = payload.model_dump()
        data["category"] = payload.category.value
        product = repo.create(Product(seller_id=seller.id, **data))
        logger.info("Seller %s listed product %s", seller.id, product.id)
        return product

    @staticmethod
    def get_product(db: Session, product_id: uuid.UUID, count_view: bool = True) -> Product:
        repo = ProductRepository(db)
        product = repo.get_by_id(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        if count_view:
            product.views_count = (product.views_count or 0) + 1
            repo.update(product)
        return product

    @staticmethod
    def _owned_product(db: Session, seller: User, product_id: uuid.UUID) -> Product:
        product = ProductRepository(db).get_by_id(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        if product.seller_id != seller.id:
            raise ForbiddenError("You can only manage your own products", code="NOT_OWNER")
        return product

    @staticmethod
    def update_product(db: Session, seller: User, product_id: uuid.UUID, payload: ProductUpdate) -> Product:
        product = MarketplaceService._owned_product(db, seller, product_id)
        changes = payload.model_dump(exclude_unset=True)

        # Re-activating counts against the plan limit like a new listing
        if changes.get("is_active") and not product.is_active:
            tier = SubscriptionService.effective_tier(seller)
            current = ProductRepository(db).count_active_for_seller(seller.id)
            if not commissions.can_add_product(current, tier):
                raise ForbiddenError(
                    "Active product limit reached for your plan",
                    details={"tier": tier.value, "current_count": current,
                             "limit": commissions.get_plan(tier).max_products},
                    code="tier_limit_reached",
                )

        for key, value in changes.items():
            if key == "category" and value is not None:
                value = ProductCategory(value).value
            setattr(product, key, value)
        return ProductRepository(db).update(product)

    @staticmethod
    def deactivate_product(db: Session, seller: User, product_id: uuid.UUID) -> Product:
        """Soft delete: the row stays so past orders keep their product"""
        product = MarketplaceService._owned_product(db, seller, product_id)
        product.is_active = False
        return ProductRepository(db).update(product)

    @staticmethod
    def search_products(
        db: Session,
        query: Optional[str] = None,
        category: Optional[str] = None,
        location: Optional[str] = None,
        seller_id: Optional[uuid.UUID] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Product], int]:
        return ProductRepository(db).search(
            query=query.strip() if query else None,
            category=category,
            location=location.strip() if location else None,
            seller_id=seller_id,
            offset=offset,
            limit=limit,
        )

    @staticmethod
    def category_counts(db: Session) -> Dict[str, Any]:
        counts = ProductRepository(db).category_counts()
        categories = {c.value: counts.get(c.value, 0) for c in ProductCategory}
        return {"categories": categories, "total_products": sum(categories.values())}

    @staticmethod
    def storefront(db: Session, username: str) -> Dict[str, Any]:
        seller = UserRepository(db).get_by_username(username)
        if not seller:
            raise NotFoundError("Storefront not found")
        return {
            "seller": seller,
            "products": ProductRepository(db).for_seller(seller.id),
            "subscription_tier": SubscriptionService.effective_tier(seller).value,
        }

    @staticmethod
    def seller_analytics(db: Session, seller: User) -> Dict[str, Any]:
        items = ProductRepository(db).for_seller(seller.id, active_only=False)
        tier = SubscriptionService.effective_tier(seller)
        limit = commissions.get_plan(tier).max_products
        active = sum(1 for p in items if p.is_active)
        return {
            "total_products": len(items),
            "active_products": active,
            "total_views": sum(p.views_count or 0 for p in items),
            "total_sales": sum(p.sales_count or 0 for p in items),
            "monthly_revenue": Decimal(seller.monthly_revenue or 0),
            "subscription_tier": tier.value,
            "product_limit": limit,
            "products_remaining": None if limit is None else max(0, limit - active),
        }

    @staticmethod
    def suggested_ingredients(db: Session, recipe_id: uuid.UUID, limit: int = 10) -> List[Product]:
        """Marketplace ingredient products that match a recipe's ingredient list"""
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        wanted = [k for k in (ingredient_key(i) for i in recipe.ingredients or []) if k]
        if not wanted:
            return []

        matches = []
        for product in ProductRepository(db).ingredient_products():
            name = product.name.lower()
            if any(w in name or name in w for w in wanted):
                matches.append(product)
            if len(matches) >= limit:
                break
        return matches
