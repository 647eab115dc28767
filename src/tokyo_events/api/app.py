"""FastAPI application factory.

Creates and configures the FastAPI application with all routes and middleware.

## Usage

```python
from tokyo_events.api import create_app

app = create_app()

# Run with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
```

## State

Each app owns one `AppState` (all in-memory stores) and one event source.
Both can be passed in, which is how tests get isolated instances.

## Configuration

The app is configured via environment variables. See `tokyo_events.config`
for available settings.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tokyo_events.config import get_settings
from tokyo_events.providers.base import EventSource
from tokyo_events.providers.perplexity import PerplexityEventSource
from tokyo_events.storage.state import AppState

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown tasks:
    - Log the seeded catalog
    - Close the event source HTTP client on shutdown
    """
    settings = get_settings()

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Loaded {len(app.state.store.districts)} districts")

    yield

    # Shutdown
    logger.info("Shutting down")
    await app.state.event_source.aclose()


def create_event_source() -> EventSource:
    """Create the configured event source."""
    settings = get_settings()

    return PerplexityEventSource(
        api_key=settings.perplexity_api_key,
        model=settings.perplexity_model,
        base_url=settings.perplexity_base_url,
        timeout=settings.event_source_timeout_seconds,
        max_attempts=settings.event_source_max_attempts,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request input as 400 instead of FastAPI's 422."""
    errors = [
        {
            "path": ".".join(str(part) for part in error.get("loc", ())[1:]),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Input validation failed", "errors": errors},
    )


def create_app(
    state: AppState | None = None,
    event_source: EventSource | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        state: Store container (default: fresh state from settings)
        event_source: External event source (default: Perplexity)

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Search and save events in Tokyo",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    app.state.store = state if state is not None else AppState.from_settings(settings)
    app.state.event_source = event_source if event_source is not None else create_event_source()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routers
    from tokyo_events.api.routes import auth, districts, events, favorites

    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(districts.router, prefix="/api/districts", tags=["Districts"])
    app.include_router(events.router, prefix="/api/events", tags=["Events"])
    app.include_router(favorites.router, prefix="/api/favorites", tags=["Favorites"])

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    return app
