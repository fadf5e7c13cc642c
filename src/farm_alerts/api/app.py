"""FastAPI application factory.

Creates and configures the FastAPI application with all routes and middleware.

## Usage

```python
from farm_alerts.api import create_app

app = create_app()

# Run with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
```

## Configuration

The app is configured via environment variables. See `farm_alerts.config`
for available settings.

## Errors

Every failure is returned as `{"error": <message>, "alerts": []}`:

- 400: missing or malformed request field
- 502: weather provider unavailable
- 503: weather provider not configured
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from farm_alerts.config import get_settings
from farm_alerts.exceptions import FarmAlertsError, RequestValidationFailed

logger = logging.getLogger(__name__)


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "alerts": []})


def describe_validation_error(exc: RequestValidationError) -> RequestValidationFailed:
    """Turn the first pydantic error into a message naming the field."""
    errors = exc.errors()
    if not errors:
        return RequestValidationFailed("Invalid request")

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    error_type = first.get("type", "")

    if error_type == "json_invalid":
        return RequestValidationFailed("Request body must be valid JSON")
    if not loc:
        return RequestValidationFailed("Request body is required")

    field = loc[-1]
    if error_type in ("missing", "string_too_short"):
        return RequestValidationFailed(f"{field.capitalize()} is required", field=field)
    return RequestValidationFailed(f"Invalid {field}: {first.get('msg', 'invalid value')}", field=field)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    if not settings.weather_provider_configured:
        logger.warning("WEATHERAPI_KEY is not set; alert requests will fail with 503")

    yield

    logger.info("Shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Prioritized farming alerts from weather forecasts and the season calendar",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.exception_handler(FarmAlertsError)
    async def farm_alerts_error_handler(request: Request, exc: FarmAlertsError) -> JSONResponse:
        logger.error(f"Error generating farming alerts: {exc.message}")
        return _error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = describe_validation_error(exc)
        logger.warning(f"Rejected request to {request.url.path}: {error.message}")
        return _error_response(error.message, status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Error generating farming alerts: {exc}")
        return _error_response(str(exc) or type(exc).__name__, status.HTTP_500_INTERNAL_SERVER_ERROR)

    # Include routers
    from farm_alerts.api.routes import alerts

    app.include_router(alerts.router, tags=["Alerts"])

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    return app
