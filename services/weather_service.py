from typing import Any, Callable, Dict, Optional, Tuple
import logging
import time

from adapters import open_meteo
from app.config import settings
from app.exceptions import UpstreamServiceError

logger = logging.getLogger("chefsire.weather")

COLD_BELOW_F = 50
HOT_ABOVE_F = 80


def describe(code: int) -> str:
    """Short description of a WMO weather interpretation code"""
    if code == 0:
        return "clear sky"
    if code <= 3:
        return "partly cloudy"
    if code <= 48:
        return "foggy"
    if code <= 57:
        return "drizzle"
    if code <= 67:
        return "rain"
    if code <= 77:
        return "snow"
    if code <= 82:
        return "rain showers"
    if code <= 86:
        return "snow showers"
    if code <= 99:
        return "thunderstorm"
    return "unknown"


def is_raining(code: int) -> bool:
    # drizzle, rain, rain showers, thunderstorm
    return 51 <= code <= 67 or 80 <= code <= 82 or 95 <= code <= 99


def build_conditions(temperature: float, code: int) -> Dict[str, Any]:
    return {
        "temperature": temperature,
        "weather_code": code,
        "description": describe(code),
        "is_raining": is_raining(code),
        "is_cold": temperature < COLD_BELOW_F,
        "is_hot": temperature > HOT_ABOVE_F,
    }


def drink_recommendations(weather: Dict[str, Any]) -> Dict[str, Any]:
    temp = f"{weather['temperature']:g}°F"
    if weather["is_hot"]:
        return {
            "categories": ["smoothie", "juice", "iced"],
            "tags": ["refreshing", "hydrating", "cold"],
            "description": f"It's {temp} and hot! Perfect weather for something cold and refreshing",
        }
    if weather["is_cold"] or weather["is_raining"]:
        rainy = " and rainy" if weather["is_raining"] else ""
        return {
            "categories": ["coffee", "tea", "hot chocolate", "warm"],
            "tags": ["warming", "cozy", "comforting"],
            "description": f"It's {temp}{rainy}! Time for something warm and cozy",
        }
    return {
        "categories": ["smoothie", "juice", "protein shake"],
        "tags": ["energizing", "balanced"],
        "description": f"Perfect {temp} weather! Great for any drink you're craving",
    }


class WeatherService:
    """
    Current conditions from Open-Meteo, cached per location.

    Coordinates are rounded to two decimals (about 1 km) for the cache key,
    so nearby requests share one upstream call for ``weather_cache_ttl_sec``.
    """

    _cache: Dict[Tuple[float, float], Tuple[float, Dict[str, Any]]] = {}
    clock: Callable[[], float] = time.monotonic

    @classmethod
    def clear_cache(cls) -> None:
        cls._cache.clear()

    @classmethod
    def _store(cls, key: Tuple[float, float], now: float, weather: Dict[str, Any]) -> None:
        """Cache ``weather``, dropping expired entries and then the oldest past the size cap"""
        ttl = settings.weather_cache_ttl_sec
        for stale in [k for k, (at, _) in cls._cache.items() if now - at >= ttl]:
            del cls._cache[stale]
        cls._cache.pop(key, None)
        while len(cls._cache) >= settings.weather_cache_max_entries:
            # Oldest write first
            del cls._cache[next(iter(cls._cache))]
        cls._cache[key] = (now, weather)

    @classmethod
    def current(cls, latitude: Optional[float] = None, longitude: Optional[float] = None) -> Dict[str, Any]:
        """
        Raises:
            UpstreamServiceError: WEATHER_UNAVAILABLE when Open-Meteo fails
        """
        lat = settings.default_latitude if latitude is None else latitude
        lon = settings.default_longitude if longitude is None else longitude
        key = (round(lat, 2), round(lon, 2))

        now = cls.clock()
        cached = cls._cache.get(key)
        if cached and now - cached[0] < settings.weather_cache_ttl_sec:
            return cached[1]

        try:
            current = open_meteo.fetch_current(lat, lon)
        except UpstreamServiceError as exc:
            logger.warning("Weather lookup failed for %s: %s", key, exc)
            raise UpstreamServiceError(
                "Weather data unavailable", details=exc.details, code="WEATHER_UNAVAILABLE"
            )

        weather = build_conditions(current["temperature"], current["weather_code"])
        cls._store(key, now, weather)
        logger.debug("Cached weather for %s: %s", key, weather["description"])
        return weather

    @classmethod
    def drink_suggestions(cls, latitude: Optional[float] = None, longitude: Optional[float] = None) -> Dict[str, Any]:
        weather = cls.current(latitude, longitude)
        return {"weather": weather, "recommendations": drink_recommendations(weather)}
