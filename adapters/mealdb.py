"""TheMealDB adapter for external recipe search.
"""

from typing import Optional, Dict, Any, List
import logging
import re

from adapters import http_client
from app.config import settings
from app.exceptions import UpstreamServiceError

logger = logging.getLogger("chefsire.mealdb")

MAX_INGREDIENTS = 20


def _text(value: Any) -> str:
    return (str(value) if value is not None else "").strip()


def _split_lines(instructions: Any) -> List[str]:
    text = _text(instructions)
    if not text:
        return []
    return [line.strip() for line in re.split(r"\r?\n+", text) if line.strip()]


def parse_meal(meal: Dict[str, Any]) -> Dict[str, Any]:
    ingredients = []
    for i in range(1, MAX_INGREDIENTS + 1):
        ing = _text(meal.get(f"strIngredient{i}"))
        measure = _text(meal.get(f"strMeasure{i}"))
        if ing:
            ingredients.append(f"{measure} {ing}" if measure else ing)

    return {
        "id": f"mealdb-{meal.get('idMeal')}",
        "title": _text(meal.get("strMeal")) or "Untitled",
        "image_url": _text(meal.get("strMealThumb")) or None,
        "ingredients": ingredients,
        "instructions": _split_lines(meal.get("strInstructions")),
        "cuisine": _text(meal.get("strArea")) or None,
        "meal_type": _text(meal.get("strCategory")) or None,
        "diet_tags": [],
        "source": "mealdb",
    }


def search(query: Optional[str]) -> List[Dict[str, Any]]:
    """Search meals by name; with no query, list meals starting with 'c'.

    Provider outages return an empty list so local results still show.
    """
    params = {"s": query.strip()} if query and query.strip() else {"f": "c"}
    try:
        data = http_client.get_json(
            f"{settings.mealdb_base_url}/search.php", params=params, service="TheMealDB"
        )
    except UpstreamServiceError as exc:
        logger.warning("TheMealDB search failed, continuing without it: %s", exc)
        return []
    meals = (data or {}).get("meals") if isinstance(data, dict) else None
    if not isinstance(meals, list):
        return []
    return [parse_meal(m) for m in meals]
