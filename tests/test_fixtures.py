"""
Shared test fixtures and utilities for the ChefSire test suite.

This module contains the test client, factories that write realistic rows
straight to the test database, and helpers for authenticated requests.
"""

import uuid
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from adapters import http_client
from app.security import create_access_token
from domain.models import (
    PantryItem,
    Post,
    Product,
    Recipe,
    SessionLocal,
    User,
)
from main import app

# Lifespan is not entered without a context manager, the schema comes from conftest
client = TestClient(app)

API = "/api"


# Helper function to generate unique emails
def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4()}@example.com"


# Realistic default user profiles
REALISTIC_USERS = {
    "default": {"username": "sarah_cooks", "display_name": "Sarah Martinez"},
    "chef": {"username": "chef_michael", "display_name": "Michael Chen", "is_chef": True},
    "casual": {"username": "emma_eats", "display_name": "Emma Johnson"},
    "seller": {"username": "raj_spices", "display_name": "Raj Patel"},
}


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Session on the same in-memory engine the app uses.

    Rows committed here are visible to requests made through ``client``.
    Call ``db_session.expire_all()`` before re-reading rows the API changed.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def make_user(db: Session, profile_type: str = "default", **overrides) -> User:
    """
    Persist a user with realistic data.

    The username gets a short random suffix so several users of one profile
    type can coexist in a test.
    """
    profile = dict(REALISTIC_USERS.get(profile_type, REALISTIC_USERS["default"]))
    suffix = uuid.uuid4().hex[:6]
    fields = {
        "username": f"{profile.pop('username')}_{suffix}",
        "email": unique_email(profile_type),
        "password_hash": "not-a-real-hash",
        **profile,
    }
    fields.update(overrides)
    user = User(**fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    """Bearer header for ``user``"""
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


def make_post(db: Session, user: User, caption: str = "Sunday sourdough", **overrides) -> Post:
    post = Post(user_id=user.id, caption=caption, tags=["baking"], **overrides)
    db.add(post)
    user.posts_count = (user.posts_count or 0) + 1
    db.commit()
    db.refresh(post)
    return post


def make_recipe(
    db: Session,
    user: User,
    title: str = "Garlic Butter Pasta",
    ingredients=None,
    difficulty: str = "Easy",
    **overrides,
) -> Recipe:
    """Recipe post plus its recipe row"""
    post = make_post(db, user, caption=title, is_recipe=True)
    recipe = Recipe(
        post_id=post.id,
        title=title,
        ingredients=ingredients
        if ingredients is not None
        else ["200 g spaghetti", "3 cloves garlic, minced", "2 tbsp butter"],
        instructions=["Boil pasta", "Melt butter with garlic", "Toss"],
        difficulty=difficulty,
        cook_time=20,
        servings=2,
        **overrides,
    )
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


def make_product(
    db: Session,
    seller: User,
    name: str = "Smoked Paprika",
    price: Decimal = Decimal("12.50"),
    category: str = "spices",
    description: str = "Small-batch, packed to order",
    inventory: int = 10,
    **overrides,
) -> Product:
    product = Product(
        seller_id=seller.id,
        name=name,
        description=description,
        price=price,
        category=category,
        inventory=inventory,
        shipping_cost=Decimal("4.00"),
        **overrides,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def make_pantry_item(
    db: Session,
    user: User,
    name: str = "spaghetti",
    expiration_date: date = None,
    **overrides,
) -> PantryItem:
    item = PantryItem(
        user_id=user.id,
        name=name,
        quantity=Decimal("500"),
        unit="g",
        expiration_date=expiration_date,
        **overrides,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def days_from_today(days: int) -> date:
    return date.today() + timedelta(days=days)


def install_mock_transport(handler: Callable[[httpx.Request], httpx.Response]) -> None:
    """Route every outbound call through ``handler``"""
    http_client.connect(httpx.Client(transport=httpx.MockTransport(handler)))
