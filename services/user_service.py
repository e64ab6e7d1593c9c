from typing import List
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import User
from domain.schemas.user_schemas import UserUpdateRequest
from repositories import UserRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("chefsire.users")


class UserService:
    @staticmethod
    def get_user(db: Session, user_id: uuid.UUID) -> User:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    @staticmethod
    def get_by_username(db: Session, username: str) -> User:
        user = UserRepository(db).get_by_username(username)
        if not user:
            raise NotFoundError(f"User {username} not found")
        return user

    @staticmethod
    def update_profile(db: Session, user: User, update: UserUpdateRequest) -> User:
        """Apply only the fields present in the request body"""
        for key, value in update.model_dump(exclude_unset=True).items():
            setattr(user, key, value)
        return UserRepository(db).update(user)

    @staticmethod
    def search(db: Session, query: str, limit: int = 20) -> List[User]:
        query = query.strip()
        if not query:
            return []
        return UserRepository(db).search(query, limit)

    @staticmethod
    def suggested(db: Session, user_id: uuid.UUID, limit: int = 5) -> List[User]:
        return UserRepository(db).suggested_for(user_id, limit)
