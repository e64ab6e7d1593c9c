from typing import List, Optional
from sqlalchemy.orm import Session
from datetime import date, timedelta
import logging
import re
import uuid

from domain.models import PantryItem, User
from domain.schemas.planning_schemas import PantryItemCreate, PantryItemUpdate
from repositories import PantryRepository, RecipeRepository
from app.exceptions import ForbiddenError, NotFoundError

logger = logging.getLogger("chefsire.pantry")

UNITS = {
    "cup", "cups", "c", "tbsp", "tablespoon", "tablespoons", "tsp", "teaspoon",
    "teaspoons", "oz", "ounce", "ounces", "lb", "lbs", "pound", "pounds", "g",
    "gram", "grams", "kg", "ml", "l", "liter", "liters", "pinch", "dash",
    "clove", "cloves", "can", "cans", "slice", "slices", "piece", "pieces",
    "handful", "bunch", "large", "medium", "small", "of",
}
_QUANTITY = re.compile(r"^[\d/.,\-¼-¾⅐-⅞]+$")


def ingredient_key(text: Optional[str]) -> str:
    """
    Reduce a recipe ingredient line to the ingredient name.

    "2 cups all-purpose flour" -> "all-purpose flour". Leading quantities and
    unit words are dropped; anything after a comma is a preparation note.
    """
    if not text:
        return ""
    words = text.lower().split(",")[0].split()
    while words and (_QUANTITY.match(words[0]) or words[0].rstrip(".") in UNITS):
        words.pop(0)
    return " ".join(words).strip()


class PantryService:
    @staticmethod
    def get_pantry(db: Session, user_id: uuid.UUID) -> List[PantryItem]:
        return PantryRepository(db).get_by_user_id(user_id)

    @staticmethod
    def add_item(db: Session, user: User, item: PantryItemCreate) -> PantryItem:
        try:
            pantry_item = PantryRepository(db).create(
                PantryItem(user_id=user.id, **item.model_dump())
            )
        except Exception:
            db.rollback()
            logger.exception("Error adding pantry item for user %s", user.id)
            raise
        logger.info("User %s added %s to pantry", user.id, pantry_item.name)
        return pantry_item

    @staticmethod
    def _owned_item(db: Session, user: User, item_id: uuid.UUID) -> PantryItem:
        item = PantryRepository(db).get_by_id(item_id)
        if not item:
            raise NotFoundError(f"Pantry item {item_id} not found")
        if item.user_id != user.id:
            raise ForbiddenError("This pantry item belongs to another user", code="NOT_OWNER")
        return item

    @staticmethod
    def update_item(db: Session, user: User, item_id: uuid.UUID, changes: PantryItemUpdate) -> PantryItem:
        item = PantryService._owned_item(db, user, item_id)
        for key, value in changes.model_dump(exclude_unset=True).items():
            setattr(item, key, value)
        return PantryRepository(db).update(item)

    @staticmethod
    def remove_item(db: Session, user: User, item_id: uuid.UUID) -> None:
        PantryService._owned_item(db, user, item_id)
        PantryRepository(db).delete(item_id)

    @staticmethod
    def get_expiring_soon(
        db: Session, user_id: uuid.UUID, days: int = 7, today: Optional[date] = None
    ) -> List[PantryItem]:
        """
        Get pantry items expiring within the next ``days`` days.

        Items that already expired (or expire today) and items without an
        expiration date are not included.

        Returns:
            List[PantryItem]: soonest expiry first
        """
        today = today or date.today()
        return PantryRepository(db).get_expiring(user_id, today, today + timedelta(days=days))

    @staticmethod
    def recipe_matches(
        db: Session,
        user_id: uuid.UUID,
        require_all: bool = False,
        max_missing: int = 3,
        limit: int = 20,
    ) -> List[dict]:
        """
        Score recipes by how much of their ingredient list is in the pantry.

        An ingredient counts as present when its name and a pantry item name
        contain one another. Recipes are ranked by match score, then by the
        number of missing ingredients.

        Args:
            require_all: Only return recipes with nothing missing
            max_missing: Upper bound on missing ingredients when not require_all
            limit: Maximum number of matches returned
        """
        pantry_names = {
            ingredient_key(i.name) for i in PantryRepository(db).get_by_user_id(user_id)
        }
        pantry_names.discard("")
        if not pantry_names:
            return []

        scored = []
        for recipe in RecipeRepository(db).with_ingredients(limit=200):
            ingredients = [i for i in (recipe.ingredients or []) if ingredient_key(i)]
            if not ingredients:
                continue

            matched, missing = [], []
            for line in ingredients:
                key = ingredient_key(line)
                if any(p in key or key in p for p in pantry_names):
                    matched.append(line)
                else:
                    missing.append(line)

            if require_all and missing:
                continue
            if not require_all and len(missing) > max_missing:
                continue

            scored.append(
                {
                    "recipe_id": recipe.id,
                    "post_id": recipe.post_id,
                    "title": recipe.title,
                    "image_url": recipe.image_url,
                    "match_score": round(len(matched) * 100 / len(ingredients)),
                    "matched_ingredients": matched,
                    "missing_ingredients": missing,
                    "can_make": not missing,
                }
            )

        scored.sort(key=lambda m: (-m["match_score"], len(m["missing_ingredients"])))
        return scored[:limit]
