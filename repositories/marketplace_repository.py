"""
Marketplace Repository - Data access layer for products, orders, stores and plan history
"""

from typing import Optional, List, Tuple, Dict
from uuid import UUID
from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Product, Order, Store, SubscriptionHistory


class ProductRepository(BaseRepository[Product]):
    """Repository for marketplace products"""

    def __init__(self, db: Session):
        super().__init__(db, Product)

    def count_active_for_seller(self, seller_id: UUID) -> int:
        return (
            self.db.query(func.count(Product.id))
            .filter(Product.seller_id == seller_id, Product.is_active.is_(True))
            .scalar()
        )

    def search(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        location: Optional[str] = None,
        seller_id: Optional[UUID] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Product], int]:
        """Active products matching the filters, newest first, with the total count"""
        q = self.db.query(Product).filter(Product.is_active.is_(True))
        if query:
            pattern = f"%{query.lower()}%"
            q = q.filter(
                or_(
                    func.lower(Product.name).like(pattern),
                    func.lower(Product.description).like(pattern),
                )
            )
        if category:
            q = q.filter(Product.category == category)
        if location:
            q = q.filter(func.lower(Product.location).like(f"%{location.lower()}%"))
        if seller_id:
            q = q.filter(Product.seller_id == seller_id)

        total = q.count()
        items = (
            q.order_by(Product.created_at.desc()).offset(offset).limit(limit).all()
        )
        return items, total

    def category_counts(self) -> Dict[str, int]:
        rows = (
            self.db.query(Product.category, func.count(Product.id))
            .filter(Product.is_active.is_(True))
            .group_by(Product.category)
            .all()
        )
        return {category: count for category, count in rows}

    def for_seller(self, seller_id: UUID, active_only: bool = True) -> List[Product]:
        q = self.db.query(Product).filter(Product.seller_id == seller_id)
        if active_only:
            q = q.filter(Product.is_active.is_(True))
        return q.order_by(Product.created_at.desc()).all()

    def take_stock(self, product_id: UUID, quantity: int) -> bool:
        """
        Atomically move ``quantity`` units from inventory to sales.

        The row is only touched while enough inventory is left, so concurrent
        checkouts can never drive it below zero.

        Returns:
            False when there was not enough inventory
        """
        updated = (
            self.db.query(Product)
            .filter(Product.id == product_id, Product.inventory >= quantity)
            .update(
                {
                    Product.inventory: Product.inventory - quantity,
                    Product.sales_count: func.coalesce(Product.sales_count, 0) + quantity,
                },
                synchronize_session=False,
            )
        )
        return updated == 1

    def return_stock(self, product_id: UUID, quantity: int) -> None:
        self.db.query(Product).filter(Product.id == product_id).update(
            {
                Product.inventory: Product.inventory + quantity,
                Product.sales_count: case(
                    (Product.sales_count > quantity, Product.sales_count - quantity),
                    else_=0,
                ),
            },
            synchronize_session=False,
        )

    def ingredient_products(self, limit: int = 200) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.is_active.is_(True), Product.category == "ingredients")
            .order_by(Product.sales_count.desc(), Product.created_at.desc())
            .limit(limit)
            .all()
        )


class OrderRepository(BaseRepository[Order]):
    def __init__(self, db: Session):
        super().__init__(db, Order)

    def for_buyer(self, buyer_id: UUID, offset: int = 0, limit: int = 20) -> List[Order]:
        return (
            self.db.query(Order)
            .filter(Order.buyer_id == buyer_id)
            .order_by(Order.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def for_seller(self, seller_id: UUID, offset: int = 0, limit: int = 20) -> List[Order]:
        return (
            self.db.query(Order)
            .filter(Order.seller_id == seller_id)
            .order_by(Order.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )


class StoreRepository(BaseRepository[Store]):
    def __init__(self, db: Session):
        super().__init__(db, Store)

    def get_by_handle(self, handle: str) -> Optional[Store]:
        return self.db.query(Store).filter(Store.handle == handle.lower()).first()

    def get_by_owner(self, user_id: UUID) -> Optional[Store]:
        return self.db.query(Store).filter(Store.user_id == user_id).first()


class SubscriptionHistoryRepository(BaseRepository[SubscriptionHistory]):
    def __init__(self, db: Session):
        super().__init__(db, SubscriptionHistory)

    def for_user(self, user_id: UUID, limit: int = 25) -> List[SubscriptionHistory]:
        return (
            self.db.query(SubscriptionHistory)
            .filter(SubscriptionHistory.user_id == user_id)
            .order_by(SubscriptionHistory.created_at.desc())
            .limit(limit)
            .all()
        )
