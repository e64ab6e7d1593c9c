"""
App package - Application configuration and core utilities.
Contains settings, exceptions, security helpers and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    ChefSireError,
    ServiceValidationError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    UpstreamServiceError,
)

__all__ = [
    "settings",
    "ChefSireError",
    "ServiceValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "UpstreamServiceError",
]
