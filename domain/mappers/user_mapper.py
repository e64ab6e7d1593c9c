"""
User domain mappers.
Handles transformation between ORM models and DTOs for user-related entities.
"""

from domain.models import User
from domain.schemas.user_schemas import UserPublicResponse, UserMeResponse


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_public(user: User) -> UserPublicResponse:
        """Profile as other users see it (no email, plan or nutrition data)."""
        return UserPublicResponse.model_validate(user)

    @staticmethod
    def to_me(user: User) -> UserMeResponse:
        """
        Convert User ORM model to the caller's own profile DTO.

        Args:
            user: User ORM instance

        Returns:
            UserMeResponse with private account fields
        """
        return UserMeResponse(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            bio=user.bio,
            avatar=user.avatar,
            specialty=user.specialty,
            is_chef=user.is_chef,
            is_private=user.is_private,
            posts_count=user.posts_count,
            followers_count=user.followers_count,
            following_count=user.following_count,
            created_at=user.created_at,
            email=user.email,
            subscription_tier=user.subscription_tier,
            subscription_status=user.subscription_status,
            subscription_ends_at=user.subscription_ends_at,
            nutrition_premium=user.nutrition_premium,
            nutrition_trial_ends_at=user.nutrition_trial_ends_at,
            daily_calorie_goal=user.daily_calorie_goal,
            macro_goals=user.macro_goals,
            dietary_restrictions=user.dietary_restrictions or [],
            catering_enabled=user.catering_enabled,
            catering_location=user.catering_location,
            catering_radius=user.catering_radius,
            catering_available=user.catering_available,
        )
