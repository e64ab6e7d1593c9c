"""
Tests for Pantry Management.

This test suite covers pantry inventory operations:
- Adding, updating and removing pantry items
- Ownership checks on item changes
- Expiration tracking (the "use it soon" list)
- Ingredient name extraction from recipe lines
- Recipe matching against the pantry

The pantry serves as:
- Input for "what can I cook" recipe matches
- Source for expiring-soon reminders
"""

import pytest
import uuid

from test_fixtures import (
    API,
    auth_headers,
    client,
    db_session,
    days_from_today,
    make_pantry_item,
    make_recipe,
    make_user,
)
from services.pantry_service import PantryService, ingredient_key
from app.exceptions import ForbiddenError, NotFoundError


# =============================================================================
# PANTRY MANAGEMENT FLOW
# =============================================================================

EXAMPLE_PANTRY_FLOW = """
Pantry Management Flow
======================

1. ADD ITEM TO PANTRY
   POST /api/pantry
   {"name": "chicken thighs", "quantity": 500, "unit": "g", "expiration_date": "2025-11-05"}

   Response: 201 Created

2. WHAT IS EXPIRING?
   GET /api/pantry/expiring?days=3

   Response: 200 OK, soonest first, already-expired items left out

3. WHAT CAN I COOK?
   GET /api/recipes/pantry-matches?max_missing=1

   Response: 200 OK
   [
       {
           "title": "Garlic Butter Pasta",
           "match_score": 67,
           "matched_ingredients": ["200 g spaghetti", "2 tbsp butter"],
           "missing_ingredients": ["3 cloves garlic, minced"],
           "can_make": false
       }
   ]
"""


# =============================================================================
# INGREDIENT NAMES
# =============================================================================


@pytest.mark.parametrize(
    "line,expected",
    [
        ("2 cups all-purpose flour", "all-purpose flour"),
        ("3 cloves garlic, minced", "garlic"),
        ("1/2 tsp. smoked paprika", "smoked paprika"),
        ("½ large onion", "onion"),
        ("Salt", "salt"),
        ("", ""),
        (None, ""),
    ],
)
def test_ingredient_key(line, expected):
    assert ingredient_key(line) == expected


# =============================================================================
# CRUD
# =============================================================================


def test_add_and_list_pantry_items(db_session):
    user = make_user(db_session)
    headers = auth_headers(user)

    r = client.post(
        f"{API}/pantry",
        json={"name": "Chicken thighs", "quantity": 500, "unit": "g", "location": "fridge"},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["name"] == "Chicken thighs"

    make_pantry_item(db_session, user, name="basmati rice")
    names = [i["name"] for i in client.get(f"{API}/pantry", headers=headers).json()]
    assert sorted(names) == ["Chicken thighs", "basmati rice"]


def test_update_and_delete_are_owner_only(db_session):
    owner = make_user(db_session)
    other = make_user(db_session, "casual")
    item = make_pantry_item(db_session, owner)
    url = f"{API}/pantry/{item.id}"

    assert client.patch(url, json={"unit": "kg"}, headers=auth_headers(other)).status_code == 403

    r = client.patch(url, json={"quantity": 250}, headers=auth_headers(owner))
    assert r.status_code == 200
    assert float(r.json()["quantity"]) == 250
    assert r.json()["unit"] == "g"

    assert client.delete(url, headers=auth_headers(owner)).json()["status"] == "ok"
    assert client.delete(url, headers=auth_headers(owner)).status_code == 404


def test_service_raises_domain_errors(db_session):
    owner = make_user(db_session)
    other = make_user(db_session, "casual")
    item = make_pantry_item(db_session, owner)

    with pytest.raises(ForbiddenError):
        PantryService.remove_item(db_session, other, item.id)
    with pytest.raises(NotFoundError):
        PantryService.remove_item(db_session, owner, uuid.uuid4())


# =============================================================================
# EXPIRATION
# =============================================================================


def test_expiring_window_excludes_today_and_past(db_session):
    user = make_user(db_session)
    make_pantry_item(db_session, user, name="milk", expiration_date=days_from_today(2))
    make_pantry_item(db_session, user, name="spinach", expiration_date=days_from_today(1))
    make_pantry_item(db_session, user, name="yogurt", expiration_date=days_from_today(0))
    make_pantry_item(db_session, user, name="cream", expiration_date=days_from_today(-3))
    make_pantry_item(db_session, user, name="cheddar", expiration_date=days_from_today(20))
    make_pantry_item(db_session, user, name="flour")

    r = client.get(f"{API}/pantry/expiring", params={"days": 7}, headers=auth_headers(user))

    assert r.status_code == 200
    assert [i["name"] for i in r.json()] == ["spinach", "milk"]


def test_expiring_includes_last_day_of_window(db_session):
    user = make_user(db_session)
    make_pantry_item(db_session, user, name="eggs", expiration_date=days_from_today(3))
    assert [i.name for i in PantryService.get_expiring_soon(db_session, user.id, days=3)] == ["eggs"]
    assert PantryService.get_expiring_soon(db_session, user.id, days=2) == []


def test_expiring_days_is_bounded(db_session):
    user = make_user(db_session)
    assert client.get(
        f"{API}/pantry/expiring", params={"days": 31}, headers=auth_headers(user)
    ).status_code == 400


# =============================================================================
# RECIPE MATCHES
# =============================================================================


def test_empty_pantry_matches_nothing(db_session):
    user = make_user(db_session)
    make_recipe(db_session, user)
    assert PantryService.recipe_matches(db_session, user.id) == []


def test_matches_rank_by_coverage(db_session):
    cook = make_user(db_session)
    chef = make_user(db_session, "chef")
    make_recipe(db_session, chef)
    make_recipe(
        db_session,
        chef,
        title="Shakshuka",
        ingredients=["6 eggs", "1 can crushed tomatoes", "1 onion", "2 tsp cumin", "1 bell pepper"],
    )
    make_recipe(db_session, chef, title="Toast", ingredients=[])
    for name in ("Spaghetti", "butter", "eggs"):
        make_pantry_item(db_session, cook, name=name)

    r = client.get(f"{API}/recipes/pantry-matches", headers=auth_headers(cook))

    assert r.status_code == 200
    matches = r.json()
    assert [m["title"] for m in matches] == ["Garlic Butter Pasta"]
    pasta = matches[0]
    assert pasta["match_score"] == 67
    assert pasta["missing_ingredients"] == ["3 cloves garlic, minced"]
    assert pasta["can_make"] is False

    wide = client.get(
        f"{API}/recipes/pantry-matches", params={"max_missing": 4}, headers=auth_headers(cook)
    ).json()
    assert [m["title"] for m in wide] == ["Garlic Butter Pasta", "Shakshuka"]


def test_require_all_only_returns_makeable_recipes(db_session):
    cook = make_user(db_session)
    make_recipe(db_session, cook)
    make_recipe(db_session, cook, title="Buttered Noodles", ingredients=["200 g spaghetti", "2 tbsp butter"])
    for name in ("spaghetti", "butter"):
        make_pantry_item(db_session, cook, name=name)

    matches = PantryService.recipe_matches(db_session, cook.id, require_all=True)

    assert [m["title"] for m in matches] == ["Buttered Noodles"]
    assert matches[0]["can_make"] is True
    assert matches[0]["match_score"] == 100
