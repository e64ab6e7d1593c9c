"""
Adapters package - clients for third-party HTTP APIs.
"""

from adapters import http_client, open_meteo, cocktaildb, mealdb

__all__ = ["http_client", "open_meteo", "cocktaildb", "mealdb"]
