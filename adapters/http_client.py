"""Shared outbound HTTP client for third-party APIs (weather, drinks, recipes).
"""

from typing import Optional, Dict, Any
import logging

import httpx

from app.config import settings
from app.exceptions import UpstreamServiceError

logger = logging.getLogger("chefsire.http")

_client: Optional[httpx.Client] = None


# ------------------ Connection ------------------
def connect(client: Optional[httpx.Client] = None) -> httpx.Client:
    """Install the process-wide client; tests pass one built on a MockTransport."""
    global _client
    if _client is not None and client is not None and _client is not client:
        _client.close()
    _client = client or httpx.Client(
        timeout=settings.http_timeout_sec,
        headers={"User-Agent": f"{settings.app_name}/{settings.app_version}"},
        follow_redirects=True,
    )
    return _client


def get_client() -> httpx.Client:
    """Lazy init client."""
    if _client is None:
        return connect()
    return _client


def close():
    """Close the shared client."""
    global _client
    try:
        if _client is not None:
            _client.close()
            logger.info("HTTP client closed")
    finally:
        _client = None


# ------------------ Requests ------------------
def get_json(url: str, params: Optional[Dict[str, Any]] = None, service: str = "upstream") -> Any:
    """GET ``url`` and decode JSON.

    Raises:
        UpstreamServiceError: on transport errors, non-2xx responses or bad JSON
    """
    try:
        response = get_client().get(url, params=params)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as exc:
        logger.warning("%s returned HTTP %s for %s", service, exc.response.status_code, url)
        raise UpstreamServiceError(
            f"{service} returned HTTP {exc.response.status_code}",
            details={"service": service},
        )
    except httpx.HTTPError as exc:
        logger.warning("%s request failed for %s: %s", service, url, exc)
        raise UpstreamServiceError(f"{service} unavailable", details={"service": service})
    except ValueError:
        logger.warning("%s returned a non-JSON body for %s", service, url)
        raise UpstreamServiceError(
            f"{service} returned an invalid response", details={"service": service}
        )
