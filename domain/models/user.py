"""
User-related database models.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow


class User(Base):
    """User account, social profile, seller plan and nutrition settings"""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("posts_count >= 0", name="ck_users_posts_count"),
        CheckConstraint("followers_count >= 0", name="ck_users_followers_count"),
        CheckConstraint("following_count >= 0", name="ck_users_following_count"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(30), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    display_name = Column(Text, nullable=False)
    bio = Column(Text)
    avatar = Column(Text)
    specialty = Column(Text)
    is_chef = Column(Boolean, nullable=False, default=False)
    is_private = Column(Boolean, nullable=False, default=False)

    posts_count = Column(Integer, nullable=False, default=0)
    followers_count = Column(Integer, nullable=False, default=0)
    following_count = Column(Integer, nullable=False, default=0)

    # Catering
    catering_enabled = Column(Boolean, nullable=False, default=False)
    catering_location = Column(String(20))
    catering_radius = Column(Integer, default=25)
    catering_bio = Column(Text)
    catering_available = Column(Boolean, nullable=False, default=True)

    # Marketplace plan
    subscription_tier = Column(String(20), nullable=False, default="free")
    subscription_status = Column(String(20), nullable=False, default="active")
    subscription_ends_at = Column(DateTime)
    monthly_revenue = Column(Numeric(12, 2), nullable=False, default=0)

    # Nutrition
    nutrition_premium = Column(Boolean, nullable=False, default=False)
    nutrition_trial_ends_at = Column(DateTime)
    daily_calorie_goal = Column(Integer)
    macro_goals = Column(JSON)
    dietary_restrictions = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    posts = relationship("Post", back_populates="user", cascade="all, delete-orphan")
    stories = relationship("Story", back_populates="user", cascade="all, delete-orphan")
    products = relationship(
        "Product", back_populates="seller", cascade="all, delete-orphan"
    )
    store = relationship(
        "Store", back_populates="owner", uselist=False, cascade="all, delete-orphan"
    )
    pantry_items = relationship(
        "PantryItem", back_populates="user", cascade="all, delete-orphan"
    )
    meal_plans = relationship(
        "MealPlan", back_populates="user", cascade="all, delete-orphan"
    )
    drink_stats = relationship(
        "UserDrinkStats", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )


class Follow(Base):
    """Follower -> following edge"""

    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        CheckConstraint("follower_id <> following_id", name="ck_follows_not_self"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    follower_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    following_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)

    follower = relationship("User", foreign_keys=[follower_id])
    following = relationship("User", foreign_keys=[following_id])


class FollowRequest(Base):
    """Pending request to follow a private account"""

    __tablename__ = "follow_requests"
    __table_args__ = (
        UniqueConstraint("requester_id", "target_id", name="uq_follow_requests_pair"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    requester_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    target_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    requester = relationship("User", foreign_keys=[requester_id])
    target = relationship("User", foreign_keys=[target_id])


class UserDrinkStats(Base):
    """Running drink-making streak per user"""

    __tablename__ = "user_drink_stats"

    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    total_drinks_made = Column(Integer, nullable=False, default=0)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_drink_date = Column(Date)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="drink_stats")
