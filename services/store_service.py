from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging
import uuid

from domain.models import Store, User
from domain.schemas.marketplace_schemas import StoreCreate, StoreUpdate
from repositories import ProductRepository, StoreRepository
from app.exceptions import ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger("chefsire.stores")


class StoreService:
    @staticmethod
    def create_store(db: Session, user: User, payload: StoreCreate) -> Store:
        """
        Create the user's storefront.

        Raises:
            ConflictError: If the user already has a store or the handle is taken
        """
        repo = StoreRepository(db)
        if repo.get_by_owner(user.id):
            raise ConflictError("You already have a store", code="STORE_EXISTS")
        if repo.get_by_handle(payload.handle):
            raise ConflictError(f"Handle {payload.handle} is taken", code="HANDLE_TAKEN")

        try:
            store = repo.create(
                Store(
                    user_id=user.id,
                    handle=payload.handle,
                    name=payload.name,
                    bio=payload.bio,
                    theme=payload.theme,
                )
            )
        except IntegrityError:
            db.rollback()
            raise ConflictError(f"Handle {payload.handle} is taken", code="HANDLE_TAKEN")
        logger.info("User %s opened store @%s", user.id, store.handle)
        return store

    @staticmethod
    def get_by_handle(db: Session, handle: str, viewer: Optional[User] = None) -> Dict[str, Any]:
        """Published store with its owner's active products; drafts are visible to the owner only"""
        store = StoreRepository(db).get_by_handle(handle)
        if not store or (not store.published and (viewer is None or viewer.id != store.user_id)):
            raise NotFoundError(f"Store {handle} not found")
        return {"store": store, "products": ProductRepository(db).for_seller(store.user_id)}

    @staticmethod
    def mine(db: Session, user: User) -> Store:
        store = StoreRepository(db).get_by_owner(user.id)
        if not store:
            raise NotFoundError("You do not have a store yet")
        return store

    @staticmethod
    def _owned_store(db: Session, user: User, store_id: uuid.UUID) -> Store:
        store = StoreRepository(db).get_by_id(store_id)
        if not store:
            raise NotFoundError(f"Store {store_id} not found")
        if store.user_id != user.id:
            raise ForbiddenError("You can only manage your own store", code="NOT_OWNER")
        return store

    @staticmethod
    def update_store(db: Session, user: User, store_id: uuid.UUID, payload: StoreUpdate) -> Store:
        store = StoreService._owned_store(db, user, store_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(store, key, value)
        return StoreRepository(db).update(store)

    @staticmethod
    def update_layout(db: Session, user: User, store_id: uuid.UUID, layout: Dict[str, Any]) -> Store:
        store = StoreService._owned_store(db, user, store_id)
        store.layout = layout
        return StoreRepository(db).update(store)

    @staticmethod
    def set_published(db: Session, user: User, store_id: uuid.UUID, published: bool) -> Store:
        store = StoreService._owned_store(db, user, store_id)
        store.published = published
        logger.info("Store @%s %s", store.handle, "published" if published else "unpublished")
        return StoreRepository(db).update(store)
