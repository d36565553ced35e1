from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from shopfinder.core.config import get_settings
from shopfinder.core.logging import configure_logging
from shopfinder.middleware.rate_limit import get_limiter
from shopfinder.middleware.security import SecurityHeadersMiddleware
from shopfinder.routes import auth, catalogue, health, items, offers, search, shops
from shopfinder.services.catalogue import get_base_catalogue
from shopfinder.services.overrides import get_override_store

configure_logging()
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    # Fail at startup rather than on the first search if the catalogue is bad
    base = get_base_catalogue()
    store = get_override_store()
    logger.info("Serving %d shops (%d with shopkeeper edits)", len(base), len(store.all()))
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

limiter = get_limiter()
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(auth.router)
app.include_router(catalogue.router)
app.include_router(health.router)
app.include_router(items.router)
app.include_router(offers.router)
app.include_router(search.router)
app.include_router(shops.router)

app.add_middleware(SecurityHeadersMiddleware)

if settings.environment == "development":
    cors_origins = [
        "http://localhost:3000",  # React dev server
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
else:
    cors_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    if "*" in cors_origins:
        logger.error("SECURITY ERROR: Cannot use wildcard CORS origins with credentials in production!")
        raise ValueError("Invalid CORS configuration: wildcard origins with credentials not allowed")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request.state.request_id = request.headers.get("x-request-id", datetime.now(timezone.utc).isoformat())
    response = await call_next(request)
    response.headers["x-request-id"] = request.state.request_id
    return response


@app.exception_handler(ValidationError)
async def validation_exception_handler(_: Request, exc: ValidationError) -> JSONResponse:
    """Handle Pydantic validation errors and return 422 with details."""
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(include_context=False, include_url=False)},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


__all__ = ["app"]
