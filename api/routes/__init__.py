"""API routes package"""

from . import (
    auth,
    users,
    posts,
    comments,
    likes,
    follows,
    bites,
    recipes,
    marketplace,
    stores,
    subscriptions,
    orders,
    meal_plans,
    pantry,
    nutrition,
    suggestions,
    weather,
    drinks,
    catering,
    notifications,
    health,
)

__all__ = [
    "auth",
    "users",
    "posts",
    "comments",
    "likes",
    "follows",
    "bites",
    "recipes",
    "marketplace",
    "stores",
    "subscriptions",
    "orders",
    "meal_plans",
    "pantry",
    "nutrition",
    "suggestions",
    "weather",
    "drinks",
    "catering",
    "notifications",
    "health",
]
