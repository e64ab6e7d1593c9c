"""Open-Meteo adapter: current temperature and WMO weather code.
"""

from typing import Dict, Any
import logging

from adapters import http_client
from app.config import settings
from app.exceptions import UpstreamServiceError

logger = logging.getLogger("chefsire.open_meteo")


def fetch_current(latitude: float, longitude: float) -> Dict[str, Any]:
    """Return ``{"temperature": <F>, "weather_code": <int>}`` for a location."""
    data = http_client.get_json(
        f"{settings.open_meteo_base_url}/forecast",
        params={
            "latitude": latitude,
            "longitude": longitude,
            "current": "temperature_2m,weather_code",
            "temperature_unit": "fahrenheit",
        },
        service="Open-Meteo",
    )
    current = (data or {}).get("current") or {}
    if "temperature_2m" not in current or "weather_code" not in current:
        logger.warning("Open-Meteo payload missing current conditions: %s", data)
        raise UpstreamServiceError(
            "Weather data unavailable", code="WEATHER_UNAVAILABLE"
        )
    return {
        "temperature": float(current["temperature_2m"]),
        "weather_code": int(current["weather_code"]),
    }
