"""
Per-user activity models: suggestions, notifications and catering inquiries.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow


class AiSuggestion(Base):
    """Daily recipe suggestion produced by the rule-based generator"""

    __tablename__ = "ai_suggestions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(DateTime, nullable=False, default=utcnow, index=True)
    suggestion_type = Column(String(30), nullable=False)
    recipe_id = Column(Uuid, ForeignKey("recipes.id", ondelete="SET NULL"))
    title = Column(Text, nullable=False)
    reason = Column(Text)
    confidence = Column(Float, nullable=False)
    extra = Column("metadata", JSON, nullable=False, default=dict)
    viewed = Column(Boolean, nullable=False, default=False)
    viewed_at = Column(DateTime)
    accepted = Column(Boolean, nullable=False, default=False)
    accepted_at = Column(DateTime)
    dismissed = Column(Boolean, nullable=False, default=False)
    dismissed_at = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    actor_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"))
    type = Column(String(30), nullable=False)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    read = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class CateringInquiry(Base):
    """Request from a customer to a catering-enabled chef"""

    __tablename__ = "catering_inquiries"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    chef_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_date = Column(Date, nullable=False)
    guest_count = Column(Integer)
    event_type = Column(Text)
    cuisine_preferences = Column(JSON, nullable=False, default=list)
    budget = Column(Text)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    customer = relationship("User", foreign_keys=[customer_id])
    chef = relationship("User", foreign_keys=[chef_id])
