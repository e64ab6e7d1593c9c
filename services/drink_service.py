from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from datetime import date, timedelta
import logging

from adapters import cocktaildb
from app.config import settings
from domain.models import User, UserDrinkStats
from repositories import DrinkStatsRepository
from app.exceptions import ForbiddenError, NotFoundError

logger = logging.getLogger("chefsire.drinks")

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 30
ALCOHOLIC_ORDER = {"Alcoholic": 0, "Non_Alcoholic": 1}


def is_alcoholic(value: Optional[str]) -> bool:
    """CocktailDB spells the soft variant both 'Non alcoholic' and 'Non_Alcoholic'"""
    if not value:
        return False
    return value.strip().lower().replace("_", " ") != "non alcoholic"


def age_from(birth_date: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def _age_required() -> ForbiddenError:
    return ForbiddenError(
        f"You must be {settings.minimum_drinking_age} or older to view alcoholic drinks",
        code="AGE_VERIFICATION_REQUIRED",
    )


class DrinkService:
    @staticmethod
    def verify_age(birth_date: date, today: Optional[date] = None) -> int:
        """Return the age, or raise 403 when under the drinking age"""
        age = age_from(birth_date, today)
        if age < settings.minimum_drinking_age:
            raise ForbiddenError(
                f"You must be {settings.minimum_drinking_age} or older",
                details={"age": age},
                code="UNDERAGE",
            )
        return age

    @staticmethod
    def search(
        q: Optional[str] = None,
        ingredient: Optional[str] = None,
        category: Optional[str] = None,
        alcoholic: Optional[str] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        age_verified: bool = False,
    ) -> Dict[str, Any]:
        """
        Search TheCocktailDB with a single criterion.

        Only one of ``q``, ``ingredient``, ``category``, ``alcoholic`` is
        sent upstream, in that order of precedence. Filter endpoints return
        partial records, so each hit on the page is looked up in full.
        Without age verification alcoholic drinks are left out, and asking
        for them explicitly is refused.
        """
        page_size = max(1, min(MAX_PAGE_SIZE, page_size or DEFAULT_PAGE_SIZE))
        page = max(1, page or 1)
        offset = (page - 1) * page_size
        params = {"q": q, "ingredient": ingredient, "category": category, "alcoholic": alcoholic}

        if alcoholic and alcoholic.strip() and is_alcoholic(alcoholic) and not age_verified:
            raise _age_required()

        if q and q.strip():
            drinks = [cocktaildb.parse_drink(d) for d in cocktaildb.search_by_name(q.strip())]
            if not age_verified:
                drinks = [d for d in drinks if not is_alcoholic(d["alcoholic"])]
            items = drinks[offset:offset + page_size]
            total = len(drinks)
        else:
            for kind, value in (("i", ingredient), ("c", category), ("a", alcoholic)):
                if value and value.strip():
                    hits = cocktaildb.filter_by(kind, value.strip())
                    break
            else:
                return {"items": [], "total": 0, "page": page, "page_size": page_size, "params": params}

            items = []
            dropped = 0
            for hit in hits[offset:offset + page_size]:
                raw = cocktaildb.lookup(str(hit.get("idDrink")))
                if raw is None:
                    continue
                drink = cocktaildb.parse_drink(raw)
                if not age_verified and is_alcoholic(drink["alcoholic"]):
                    dropped += 1
                    continue
                items.append(drink)
            total = len(hits) - dropped

        return {"items": items, "total": total, "page": page, "page_size": page_size, "params": params}

    @staticmethod
    def get_drink(drink_id: str, age_verified: bool = False) -> Dict[str, Any]:
        raw = cocktaildb.lookup(drink_id)
        if raw is None:
            raise NotFoundError(f"Drink {drink_id} not found")
        drink = cocktaildb.parse_drink(raw)
        if is_alcoholic(drink["alcoholic"]) and not age_verified:
            raise _age_required()
        return drink

    @staticmethod
    def meta() -> Dict[str, List[str]]:
        alcoholic = sorted(
            set(cocktaildb.list_values("alcoholic")),
            key=lambda v: (ALCOHOLIC_ORDER.get(v, 2), v),
        )
        return {
            "categories": sorted(set(cocktaildb.list_values("categories"))),
            "ingredients": sorted(set(cocktaildb.list_values("ingredients"))),
            "alcoholic": alcoholic,
            "glasses": sorted(set(cocktaildb.list_values("glasses"))),
        }

    @staticmethod
    def record_drink_made(db: Session, user: User, today: Optional[date] = None) -> UserDrinkStats:
        """
        Count a drink made today and extend the daily streak.

        A drink on the day after the last one extends the streak; a gap
        restarts it at 1. Several drinks on one day count once for the streak.
        """
        today = today or date.today()
        stats = DrinkStatsRepository(db).get_or_create(user.id)
        last = stats.last_drink_date
        if last != today:
            stats.current_streak = stats.current_streak + 1 if last == today - timedelta(days=1) else 1
        stats.total_drinks_made += 1
        stats.longest_streak = max(stats.longest_streak, stats.current_streak)
        stats.last_drink_date = today
        db.commit()
        db.refresh(stats)
        return stats
