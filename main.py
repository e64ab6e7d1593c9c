"""
ChefSire FastAPI Application
Main entry point: middleware, exception handlers and router registration
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from api.routes import (
    auth,
    users,
    posts,
    comments,
    likes,
    follows,
    bites,
    recipes,
    marketplace,
    stores,
    subscriptions,
    orders,
    meal_plans,
    pantry,
    nutrition,
    suggestions,
    weather,
    drinks,
    catering,
    notifications,
    health,
)
from api.responses import ERROR_RESPONSES

from domain.models import init_database
from adapters import http_client

from app.config import settings

from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    chefsire_exception_handler,
    general_exception_handler,
)
from app.exceptions import ChefSireError

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("chefsire.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Creates the schema with retries and closes the outbound HTTP client.
    """
    _logger.info(f"Starting ChefSire in {settings.environment.value} mode")

    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # Run blocking init in a thread to avoid blocking the event loop
            await anyio.to_thread.run_sync(init_database)
            _logger.info("Database initialization succeeded")
            break
        except Exception as exc:
            _logger.warning(
                "Database init attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error(
                    "Database initialization failed after %d attempts", attempt
                )
                raise

    try:
        yield
    finally:
        _logger.info("Shutting down ChefSire")
        http_client.close()


app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url=(
        f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
    ),
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(ChefSireError, chefsire_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

for module in (
    auth,
    users,
    posts,
    comments,
    likes,
    follows,
    bites,
    recipes,
    marketplace,
    stores,
    subscriptions,
    orders,
    meal_plans,
    pantry,
    nutrition,
    suggestions,
    weather,
    drinks,
    catering,
    notifications,
    health,
):
    app.include_router(module.router, prefix=settings.api_prefix, responses=ERROR_RESPONSES)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
