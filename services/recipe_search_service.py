from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session
import logging

from adapters import mealdb
from domain.models import Recipe
from repositories import RecipeRepository

logger = logging.getLogger("chefsire.recipe_search")

DEFAULT_LIMIT = 24
MAX_LIMIT = 50


def _lowered(values: Optional[Iterable[str]]) -> List[str]:
    return [v.strip().lower() for v in values or [] if v and v.strip()]


def local_item(recipe: Recipe) -> Dict[str, Any]:
    return {
        "id": str(recipe.id),
        "post_id": str(recipe.post_id),
        "title": recipe.title,
        "image_url": recipe.image_url,
        "ingredients": list(recipe.ingredients or []),
        "instructions": list(recipe.instructions or []),
        "cuisine": recipe.cuisine,
        "meal_type": recipe.meal_type,
        "diet_tags": list(recipe.diet_tags or []),
        "source": "local",
    }


def apply_filters(
    items: List[Dict[str, Any]],
    cuisines: Optional[List[str]] = None,
    diets: Optional[List[str]] = None,
    meal_types: Optional[List[str]] = None,
) -> List[Dict[str, Any]]:
    """
    Cuisine and meal type must contain one of the wanted values. Diet
    filtering is loose: items without any diet tags are kept, since most
    providers do not tag them.
    """
    wanted_cuisines = _lowered(cuisines)
    wanted_diets = _lowered(diets)
    wanted_meals = _lowered(meal_types)
    out = []
    for item in items:
        cuisine = (item.get("cuisine") or "").lower()
        if wanted_cuisines and not (cuisine and any(w in cuisine for w in wanted_cuisines)):
            continue
        tags = _lowered(item.get("diet_tags"))
        if wanted_diets and tags and not any(w in tags for w in wanted_diets):
            continue
        meal = (item.get("meal_type") or "").lower()
        if wanted_meals and not (meal and any(w in meal for w in wanted_meals)):
            continue
        out.append(item)
    return out


def dedupe_by_title(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    seen = set()
    out = []
    for item in items:
        key = (item.get("title") or "").strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


class RecipeSearchService:
    @staticmethod
    def search(
        db: Session,
        q: Optional[str] = None,
        cuisines: Optional[List[str]] = None,
        diets: Optional[List[str]] = None,
        meal_types: Optional[List[str]] = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> Dict[str, Any]:
        """
        Search ChefSire recipes together with TheMealDB.

        Local recipes come first, so a MealDB recipe with the same title is
        dropped by the dedupe. A MealDB outage just yields local results.
        """
        limit = max(1, min(MAX_LIMIT, limit or DEFAULT_LIMIT))
        offset = max(0, offset or 0)
        query = q.strip() if q and q.strip() else None

        combined = [local_item(r) for r in RecipeRepository(db).search_local(query)]
        combined.extend(mealdb.search(query))

        combined = dedupe_by_title(apply_filters(combined, cuisines, diets, meal_types))
        source = "mealdb" if any(i["source"] == "mealdb" for i in combined) else "local"
        logger.debug("Recipe search q=%r matched %d items (%s)", query, len(combined), source)
        return {
            "ok": True,
            "items": combined[offset:offset + limit],
            "total": len(combined),
            "source": source,
        }
