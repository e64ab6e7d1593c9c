"""Weather routes backed by Open-Meteo"""

from fastapi import APIRouter, Query
import logging
from typing import Optional

from services.weather_service import WeatherService

router = APIRouter(prefix="/weather", tags=["Weather"])
logger = logging.getLogger("chefsire.api.weather")


@router.get("/current")
def current_weather(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
):
    """Current conditions; falls back to the configured default location"""
    return WeatherService.current(lat, lon)


@router.get("/drink-suggestions")
def drink_suggestions(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
):
    return WeatherService.drink_suggestions(lat, lon)
