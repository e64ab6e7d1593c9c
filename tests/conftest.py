"""
Pytest configuration and shared fixtures.
Points the app at an in-memory SQLite database before anything imports the
settings, and ensures the project root is in sys.path for imports.
"""

import os
import sys
from pathlib import Path

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest

from adapters import http_client
from domain.models import Base, engine
from services.weather_service import WeatherService
from test_fixtures import client


@pytest.fixture(autouse=True)
def fresh_schema():
    """Every test starts from empty tables, cold outbound caches and no cookies"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    WeatherService.clear_cache()
    client.cookies.clear()
    yield
    http_client.close()
