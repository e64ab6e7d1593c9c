"""
Social content models: posts, recipes, likes, threaded comments and bites.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
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


class Post(Base):
    """Feed post; a recipe post owns exactly one Recipe row"""

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint("likes_count >= 0", name="ck_posts_likes_count"),
        CheckConstraint("comments_count >= 0", name="ck_posts_comments_count"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    caption = Column(Text)
    image_url = Column(Text)
    tags = Column(JSON, nullable=False, default=list)
    is_recipe = Column(Boolean, nullable=False, default=False)
    likes_count = Column(Integer, nullable=False, default=0)
    comments_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    user = relationship("User", back_populates="posts")
    recipe = relationship(
        "Recipe", back_populates="post", uselist=False, passive_deletes=True
    )
    comments = relationship("Comment", back_populates="post", passive_deletes=True)
    likes = relationship("Like", back_populates="post", passive_deletes=True)


class Recipe(Base):
    """Structured recipe attached to a post"""

    __tablename__ = "recipes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id = Column(
        Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    title = Column(Text, nullable=False)
    image_url = Column(Text)
    ingredients = Column(JSON, nullable=False, default=list)
    instructions = Column(JSON, nullable=False, default=list)
    cook_time = Column(Integer)
    servings = Column(Integer)
    difficulty = Column(String(20))
    calories = Column(Integer)
    protein = Column(Numeric(8, 2))
    carbs = Column(Numeric(8, 2))
    fat = Column(Numeric(8, 2))
    cuisine = Column(Text)
    meal_type = Column(Text)
    diet_tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    post = relationship("Post", back_populates="recipe")


class Like(Base):
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    post_id = Column(
        Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)

    post = relationship("Post", back_populates="likes")


class Comment(Base):
    """Post comment; replies point at their parent through parent_id"""

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint("likes_count >= 0", name="ck_comments_likes_count"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id = Column(
        Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    parent_id = Column(Uuid, ForeignKey("comments.id", ondelete="CASCADE"))
    content = Column(Text, nullable=False)
    likes_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    post = relationship("Post", back_populates="comments")
    user = relationship("User")


class CommentLike(Base):
    __tablename__ = "comment_likes"
    __table_args__ = (
        UniqueConstraint("user_id", "comment_id", name="uq_comment_likes_user_comment"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    comment_id = Column(
        Uuid, ForeignKey("comments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)


class Story(Base):
    """A bite: short-lived media post that disappears at expires_at"""

    __tablename__ = "stories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    media_url = Column(Text, nullable=False)
    caption = Column(Text)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="stories")
