"""TheCocktailDB adapter.

Raw endpoints return ``{"drinks": [...]}``; a miss comes back as
``{"drinks": null}`` (or the string "None Found" on filter endpoints).
"""

from typing import Optional, Dict, Any, List
import logging

from adapters import http_client
from app.config import settings

logger = logging.getLogger("chefsire.cocktaildb")

ID_PREFIX = "cocktaildb:"
MAX_INGREDIENTS = 15

# list.php selector per metadata kind
LIST_KINDS = {"categories": "c", "ingredients": "i", "alcoholic": "a", "glasses": "g"}


def _drinks(data: Any) -> List[Dict[str, Any]]:
    drinks = (data or {}).get("drinks") if isinstance(data, dict) else None
    return drinks if isinstance(drinks, list) else []


def _get(path: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
    return _drinks(
        http_client.get_json(
            f"{settings.cocktaildb_base_url}/{path}", params=params, service="TheCocktailDB"
        )
    )


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_drink(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize a CocktailDB record into the API's drink shape."""
    ingredients = []
    for i in range(1, MAX_INGREDIENTS + 1):
        name = _clean(raw.get(f"strIngredient{i}"))
        if not name:
            continue
        ingredients.append({"name": name, "measure": _clean(raw.get(f"strMeasure{i}"))})

    tags = _clean(raw.get("strTags"))
    return {
        "id": f"{ID_PREFIX}{raw.get('idDrink')}",
        "source_id": str(raw.get("idDrink")),
        "name": _clean(raw.get("strDrink")) or "Untitled",
        "category": _clean(raw.get("strCategory")),
        "alcoholic": _clean(raw.get("strAlcoholic")),
        "glass": _clean(raw.get("strGlass")),
        "instructions": _clean(raw.get("strInstructions")),
        "image": _clean(raw.get("strDrinkThumb")),
        "ingredients": ingredients,
        "tags": [t.strip() for t in tags.split(",") if t.strip()] if tags else [],
    }


def strip_prefix(drink_id: str) -> str:
    return drink_id[len(ID_PREFIX):] if drink_id.startswith(ID_PREFIX) else drink_id


def search_by_name(name: str) -> List[Dict[str, Any]]:
    return _get("search.php", {"s": name})


def filter_by(kind: str, value: str) -> List[Dict[str, Any]]:
    """Filter endpoint; ``kind`` is one of i (ingredient), c (category), a (alcoholic).

    Results carry only id, name and thumbnail.
    """
    return _get("filter.php", {kind: value})


def lookup(drink_id: str) -> Optional[Dict[str, Any]]:
    drinks = _get("lookup.php", {"i": strip_prefix(drink_id)})
    return drinks[0] if drinks else None


def list_values(kind: str) -> List[str]:
    """Values for one metadata kind (categories, ingredients, alcoholic, glasses)."""
    selector = LIST_KINDS[kind]
    rows = _get("list.php", {selector: "list"})
    values = []
    for row in rows:
        # Each row has a single str* field, e.g. strCategory / strIngredient1
        for value in row.values():
            text = _clean(value)
            if text:
                values.append(text)
                break
    return values
