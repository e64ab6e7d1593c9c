"""
Tests for drinks: CocktailDB parsing, search precedence, the age gate and
the drink streak. Outbound calls go through an httpx MockTransport.
"""

from datetime import date

import httpx
import pytest

from test_fixtures import API, auth_headers, client, db_session, install_mock_transport, make_user
from adapters import cocktaildb
from app.exceptions import ForbiddenError
from repositories import DrinkStatsRepository
from services.drink_service import DrinkService, age_from, is_alcoholic


MOJITO = {
    "idDrink": "11000",
    "strDrink": "Mojito",
    "strCategory": "Cocktail",
    "strAlcoholic": "Alcoholic",
    "strGlass": "Highball glass",
    "strInstructions": "Muddle mint leaves with sugar and lime juice.",
    "strDrinkThumb": "https://www.thecocktaildb.com/images/media/drink/mojito.jpg",
    "strTags": "IBA, ContemporaryClassic",
    "strIngredient1": "Light rum",
    "strMeasure1": "2-3 oz ",
    "strIngredient2": "Lime",
    "strMeasure2": "Juice of 1 ",
    "strIngredient3": "Mint",
    "strMeasure3": None,
    "strIngredient4": "",
    "strMeasure4": "",
}

VIRGIN_MOJITO = {
    "idDrink": "12000",
    "strDrink": "Virgin Mojito",
    "strCategory": "Mocktail",
    "strAlcoholic": "Non alcoholic",
    "strGlass": "Highball glass",
    "strInstructions": "Muddle mint with lime and top with soda.",
    "strDrinkThumb": None,
    "strTags": None,
    "strIngredient1": "Mint",
    "strMeasure1": "6 leaves",
}

BY_ID = {"11000": MOJITO, "12000": VIRGIN_MOJITO}


class FakeCocktailDB:
    """Serves canned CocktailDB responses and records every request"""

    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.rsplit("/", 1)[-1]
        params = dict(request.url.params)

        if path == "search.php":
            drinks = [d for d in BY_ID.values() if params["s"].lower() in d["strDrink"].lower()]
            return httpx.Response(200, json={"drinks": drinks or None})
        if path == "filter.php":
            hits = [{"idDrink": d["idDrink"], "strDrink": d["strDrink"]} for d in BY_ID.values()]
            return httpx.Response(200, json={"drinks": hits})
        if path == "lookup.php":
            drink = BY_ID.get(params["i"])
            return httpx.Response(200, json={"drinks": [drink] if drink else None})
        if path == "list.php":
            if "a" in params:
                rows = [{"strAlcoholic": "Optional alcohol"}, {"strAlcoholic": "Non_Alcoholic"},
                        {"strAlcoholic": "Alcoholic"}]
            elif "c" in params:
                rows = [{"strCategory": "Shot"}, {"strCategory": "Cocktail"}]
            elif "i" in params:
                rows = [{"strIngredient1": "Vodka"}, {"strIngredient1": "Gin"}]
            else:
                rows = [{"strGlass": "Highball glass"}, {"strGlass": " "}]
            return httpx.Response(200, json={"drinks": rows})
        return httpx.Response(404)

    def paths(self):
        return [r.url.path.rsplit("/", 1)[-1] for r in self.requests]


@pytest.fixture
def cocktaildb_api():
    fake = FakeCocktailDB()
    install_mock_transport(fake)
    return fake


# =============================================================================
# PARSING AND HELPERS
# =============================================================================


def test_parse_drink_normalizes_record():
    drink = cocktaildb.parse_drink(MOJITO)

    assert drink["id"] == "cocktaildb:11000"
    assert drink["name"] == "Mojito"
    assert drink["ingredients"] == [
        {"name": "Light rum", "measure": "2-3 oz"},
        {"name": "Lime", "measure": "Juice of 1"},
        {"name": "Mint", "measure": None},
    ]
    assert drink["tags"] == ["IBA", "ContemporaryClassic"]


def test_alcoholic_spellings():
    assert is_alcoholic("Alcoholic")
    assert is_alcoholic("Optional alcohol")
    assert not is_alcoholic("Non alcoholic")
    assert not is_alcoholic("Non_Alcoholic")
    assert not is_alcoholic(None)


def test_age_counts_birthdays():
    assert age_from(date(2000, 6, 15), today=date(2021, 6, 14)) == 20
    assert age_from(date(2000, 6, 15), today=date(2021, 6, 15)) == 21
    with pytest.raises(ForbiddenError):
        DrinkService.verify_age(date(2005, 1, 1), today=date(2025, 12, 31))


# =============================================================================
# SEARCH
# =============================================================================


def test_name_search_hides_alcohol_without_verification(cocktaildb_api):
    r = client.get(f"{API}/drinks/search", params={"q": "mojito"})
    assert r.status_code == 200
    assert [d["name"] for d in r.json()["items"]] == ["Virgin Mojito"]
    assert r.json()["total"] == 1

    verified = client.get(
        f"{API}/drinks/search", params={"q": "mojito"}, headers={"X-Age-Verified": "1"}
    ).json()
    assert {d["name"] for d in verified["items"]} == {"Mojito", "Virgin Mojito"}


def test_name_takes_precedence_over_filters(cocktaildb_api):
    client.get(f"{API}/drinks/search", params={"q": "mojito", "ingredient": "Mint", "category": "Cocktail"})
    assert cocktaildb_api.paths() == ["search.php"]


def test_ingredient_filter_looks_up_each_hit(cocktaildb_api):
    r = client.get(
        f"{API}/drinks/search", params={"ingredient": "Mint", "category": "Cocktail"},
        headers={"X-Age-Verified": "1"},
    )

    body = r.json()
    assert body["total"] == 2
    assert cocktaildb_api.paths() == ["filter.php", "lookup.php", "lookup.php"]
    assert dict(cocktaildb_api.requests[0].url.params) == {"i": "Mint"}
    assert body["items"][0]["instructions"].startswith("Muddle")


def test_filter_results_drop_alcohol_from_total(cocktaildb_api):
    body = client.get(f"{API}/drinks/search", params={"category": "Cocktail"}).json()
    assert [d["name"] for d in body["items"]] == ["Virgin Mojito"]
    assert body["total"] == 1


def test_asking_for_alcoholic_drinks_needs_verification(cocktaildb_api):
    r = client.get(f"{API}/drinks/search", params={"alcoholic": "Alcoholic"})
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "AGE_VERIFICATION_REQUIRED"
    assert cocktaildb_api.requests == []

    soft = client.get(f"{API}/drinks/search", params={"alcoholic": "Non_Alcoholic"})
    assert soft.status_code == 200


def test_search_without_criteria_is_empty(cocktaildb_api):
    body = client.get(f"{API}/drinks/search").json()
    assert body["items"] == []
    assert body["total"] == 0
    assert cocktaildb_api.requests == []


def test_age_cookie_unlocks_alcoholic_detail(cocktaildb_api):
    assert client.get(f"{API}/drinks/cocktaildb:11000").status_code == 403

    underage = client.post(f"{API}/drinks/age-verify", json={"birth_date": "2015-01-01"})
    assert underage.status_code == 403
    assert underage.json()["error"]["code"] == "UNDERAGE"

    r = client.post(f"{API}/drinks/age-verify", json={"birth_date": "1990-05-20"})
    assert r.status_code == 200
    assert r.json()["verified"] is True
    assert r.cookies.get("cs_age_verified") == "1"

    # The shared client keeps the cookie from the response above
    detail = client.get(f"{API}/drinks/cocktaildb:11000")
    assert detail.status_code == 200
    assert detail.json()["name"] == "Mojito"


def test_unknown_drink_is_404(cocktaildb_api):
    assert client.get(f"{API}/drinks/cocktaildb:99999").status_code == 404


def test_meta_lists_are_sorted_and_cleaned(cocktaildb_api):
    meta = client.get(f"{API}/drinks/meta").json()
    assert meta["alcoholic"] == ["Alcoholic", "Non_Alcoholic", "Optional alcohol"]
    assert meta["categories"] == ["Cocktail", "Shot"]
    assert meta["glasses"] == ["Highball glass"]


def test_upstream_failure_is_502():
    install_mock_transport(lambda request: httpx.Response(503))
    r = client.get(f"{API}/drinks/search", params={"q": "mojito"})
    assert r.status_code == 502
    assert r.json()["success"] is False


# =============================================================================
# STREAK
# =============================================================================


def test_drink_streak(db_session):
    user = make_user(db_session)

    DrinkService.record_drink_made(db_session, user, today=date(2025, 5, 1))
    DrinkService.record_drink_made(db_session, user, today=date(2025, 5, 2))
    stats = DrinkService.record_drink_made(db_session, user, today=date(2025, 5, 2))
    assert (stats.current_streak, stats.longest_streak, stats.total_drinks_made) == (2, 2, 3)

    stats = DrinkService.record_drink_made(db_session, user, today=date(2025, 5, 5))
    assert (stats.current_streak, stats.longest_streak) == (1, 2)

    r = client.post(f"{API}/drinks/made", headers=auth_headers(user))
    assert r.status_code == 200
    assert r.json()["total_drinks_made"] == 5


def test_drink_stats_are_keyed_by_user(db_session):
    user = make_user(db_session)
    repo = DrinkStatsRepository(db_session)
    assert repo.get_by_id(user.id) is None

    DrinkService.record_drink_made(db_session, user, today=date(2025, 5, 1))

    assert repo.get_by_id(user.id).total_drinks_made == 1
    assert repo.get_or_create(user.id) is repo.get_by_id(user.id)
