from typing import Optional, Tuple
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import User, utcnow
from repositories import UserRepository
from app.exceptions import ConflictError, UnauthorizedError
from app.security import create_access_token, hash_password, verify_password, verify_token

logger = logging.getLogger("chefsire.auth")


class AuthService:
    @staticmethod
    def signup(
        db: Session, username: str, email: str, password: str, display_name: Optional[str] = None
    ) -> Tuple[User, str]:
        """
        Register a new account and issue its first access token.

        Raises:
            ConflictError: If the username or email is already taken
        """
        repo = UserRepository(db)
        if repo.get_by_username(username):
            raise ConflictError(f"Username {username} is already taken", code="USERNAME_TAKEN")
        if repo.get_by_email(email):
            raise ConflictError("Email is already registered", code="EMAIL_TAKEN")

        user = repo.create_user(
            username=username,
            email=email,
            password_hash=hash_password(password),
            display_name=display_name or username,
        )
        logger.info("Registered user %s (%s)", user.username, user.id)
        return user, create_access_token({"sub": str(user.id)})

    @staticmethod
    def login(db: Session, email: str, password: str) -> Tuple[User, str]:
        user = UserRepository(db).get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed login for %s", email)
            raise UnauthorizedError("Invalid email or password", code="INVALID_CREDENTIALS")
        return user, create_access_token({"sub": str(user.id)})

    @staticmethod
    def resolve_token(db: Session, token: Optional[str]) -> User:
        """
        Map a bearer token to its user.

        Expired nutrition trials are switched off here so every authenticated
        request sees the user's current entitlement.

        Raises:
            UnauthorizedError: NO_TOKEN when missing, BAD_TOKEN when invalid
                or when the user no longer exists
        """
        if not token:
            raise UnauthorizedError("Authentication required", code="NO_TOKEN")
        payload = verify_token(token)
        if not payload or not payload.get("sub"):
            raise UnauthorizedError("Invalid or expired token", code="BAD_TOKEN")
        try:
            user_id = uuid.UUID(str(payload["sub"]))
        except ValueError:
            raise UnauthorizedError("Invalid or expired token", code="BAD_TOKEN")

        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise UnauthorizedError("User no longer exists", code="BAD_TOKEN")

        AuthService.expire_nutrition_trial(db, user)
        return user

    @staticmethod
    def expire_nutrition_trial(db: Session, user: User) -> bool:
        """Turn off premium nutrition when the trial window has passed"""
        if (
            user.nutrition_premium
            and user.nutrition_trial_ends_at is not None
            and user.nutrition_trial_ends_at < utcnow()
        ):
            user.nutrition_premium = False
            db.commit()
            logger.info("Nutrition trial expired for user %s", user.id)
            return True
        return False
