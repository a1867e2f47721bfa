"""
CORS configuration.

Browsers calling the API from another origin (an SPA dev server, the
deployed front end) need the Location header of a 201 and the request ID
exposed, so both are listed in expose_headers.
"""

from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import Settings, settings

# Local front-end dev servers, used when ALLOWED_ORIGINS is empty
DEV_ORIGINS = [
    f"http://{host}:{port}"
    for host in ("localhost", "127.0.0.1")
    for port in (3000, 4200, 5173)
]

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_REQUEST_HEADERS = ["Accept", "Accept-Language", "Content-Type", "X-Request-ID"]
CORS_EXPOSED_HEADERS = ["Location", "X-Request-ID"]


def parse_origins(value: str) -> list[str]:
    """Split a comma-separated ALLOWED_ORIGINS value."""
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def cors_options(config: Settings) -> dict[str, Any]:
    """CORSMiddleware keyword arguments for the given settings."""
    origins = parse_origins(config.allowed_origins) or DEV_ORIGINS
    return {
        "allow_origins": origins,
        "allow_credentials": False,
        "allow_methods": CORS_METHODS,
        "allow_headers": CORS_REQUEST_HEADERS,
        "expose_headers": CORS_EXPOSED_HEADERS,
        # No preflight caching while developing so origin changes apply at once
        "max_age": 0 if config.environment == "development" else 600,
    }


def configure_cors(app: FastAPI) -> None:
    """Add CORSMiddleware configured from the application settings."""
    app.add_middleware(CORSMiddleware, **cors_options(settings))
