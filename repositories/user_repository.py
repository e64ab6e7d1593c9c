"""
User Repository - Data access layer for users, follows and follow requests
"""

from typing import Optional, List
from decimal import Decimal
from uuid import UUID
from sqlalchemy import case, func, literal, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import User, Follow, FollowRequest, UserDrinkStats
from app.exceptions import ConflictError


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_username(self, username: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(func.lower(User.username) == username.lower())
            .first()
        )

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)"""
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def create_user(
        self, username: str, email: str, password_hash: str, display_name: str
    ) -> User:
        """Create a new user"""
        user = User(
            username=username,
            email=email.lower(),
            password_hash=password_hash,
            display_name=display_name,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(
                "Username or email already in use", code="USER_EXISTS"
            )

    def search(self, query: str, limit: int = 20) -> List[User]:
        pattern = f"%{query.lower()}%"
        return (
            self.db.query(User)
            .filter(
                or_(
                    func.lower(User.username).like(pattern),
                    func.lower(User.display_name).like(pattern),
                )
            )
            .order_by(User.followers_count.desc(), User.username)
            .limit(limit)
            .all()
        )

    def suggested_for(self, user_id: UUID, limit: int = 5) -> List[User]:
        """Users that ``user_id`` does not follow yet, most followed first"""
        followed = select(Follow.following_id).where(Follow.follower_id == user_id)
        return (
            self.db.query(User)
            .filter(User.id != user_id, User.id.not_in(followed))
            .order_by(User.followers_count.desc(), User.created_at)
            .limit(limit)
            .all()
        )

    def add_revenue(self, user_id: UUID, amount: Decimal) -> None:
        """Add ``amount`` (may be negative) to monthly revenue in SQL, floored at zero"""
        new_total = func.coalesce(User.monthly_revenue, 0) + literal(amount, User.monthly_revenue.type)
        self.db.query(User).filter(User.id == user_id).update(
            {User.monthly_revenue: case((new_total > 0, new_total), else_=0)},
            synchronize_session=False,
        )

    def find_catering_chefs(self, location: str, radius: int) -> List[User]:
        return (
            self.db.query(User)
            .filter(
                User.catering_enabled.is_(True),
                User.catering_available.is_(True),
                User.catering_location == location,
                User.catering_radius >= radius,
            )
            .order_by(User.followers_count.desc())
            .all()
        )

    @staticmethod
    def adjust_counter(user: User, field: str, delta: int) -> None:
        """Apply ``delta`` to a counter column, never going below zero"""
        setattr(user, field, max(0, (getattr(user, field) or 0) + delta))


class FollowRepository(BaseRepository[Follow]):
    """Repository for follow edges and follow requests"""

    def __init__(self, db: Session):
        super().__init__(db, Follow)

    def get_pair(self, follower_id: UUID, following_id: UUID) -> Optional[Follow]:
        return (
            self.db.query(Follow)
            .filter(
                Follow.follower_id == follower_id, Follow.following_id == following_id
            )
            .first()
        )

    def following_ids(self, user_id: UUID) -> List[UUID]:
        rows = (
            self.db.query(Follow.following_id)
            .filter(Follow.follower_id == user_id)
            .all()
        )
        return [r[0] for r in rows]

    def followers_of(self, user_id: UUID, offset: int = 0, limit: int = 10) -> List[User]:
        return (
            self.db.query(User)
            .join(Follow, Follow.follower_id == User.id)
            .filter(Follow.following_id == user_id)
            .order_by(Follow.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def following_of(self, user_id: UUID, offset: int = 0, limit: int = 10) -> List[User]:
        return (
            self.db.query(User)
            .join(Follow, Follow.following_id == User.id)
            .filter(Follow.follower_id == user_id)
            .order_by(Follow.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def get_request(self, request_id: UUID) -> Optional[FollowRequest]:
        return self.db.get(FollowRequest, request_id)

    def get_request_pair(
        self, requester_id: UUID, target_id: UUID
    ) -> Optional[FollowRequest]:
        return (
            self.db.query(FollowRequest)
            .filter(
                FollowRequest.requester_id == requester_id,
                FollowRequest.target_id == target_id,
            )
            .first()
        )

    def pending_requests_for(self, target_id: UUID) -> List[FollowRequest]:
        return (
            self.db.query(FollowRequest)
            .filter(
                FollowRequest.target_id == target_id,
                FollowRequest.status == "pending",
            )
            .order_by(FollowRequest.created_at.desc())
            .all()
        )


class DrinkStatsRepository(BaseRepository[UserDrinkStats]):
    def __init__(self, db: Session):
        super().__init__(db, UserDrinkStats)

    def get_or_create(self, user_id: UUID) -> UserDrinkStats:
        stats = self.get_by_id(user_id)
        if stats is None:
            stats = UserDrinkStats(
                user_id=user_id, total_drinks_made=0, current_streak=0, longest_streak=0
            )
            self.db.add(stats)
            self.db.flush()
        return stats
