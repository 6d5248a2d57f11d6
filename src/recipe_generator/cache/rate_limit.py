"""Rate limiting using SlowAPI.

This module provides:
- The limiter, keyed by client address, with a configurable storage backend
- The rate limit exceeded handler
- The generation limit decorator, read from settings per request

Counters live in the storage named by ``rate_limiting.storage_uri``:
``memory://`` for a single process, ``redis://host:port`` when several
workers must share them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from recipe_generator.core.config import get_settings
from recipe_generator.core.exceptions import ErrorResponse
from recipe_generator.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60


def _get_rate_limit_key(request: Request) -> str:
    """Rate limit key for a request: the client address."""
    return str(get_remote_address(request))


def create_limiter() -> Limiter:
    """Create and configure the rate limiter.

    Returns:
        Configured Limiter instance.
    """
    settings = get_settings()

    return Limiter(
        key_func=_get_rate_limit_key,
        default_limits=[settings.rate_limiting.default],
        storage_uri=settings.rate_limiting.storage_uri,
        strategy="fixed-window",
        headers_enabled=True,
        enabled=settings.rate_limiting.enabled,
    )


# Global limiter instance; decorators bind to it at import time
limiter = create_limiter()


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> Response:
    """Handle rate limit exceeded exceptions.

    Args:
        request: The incoming request.
        exc: The rate limit exception.

    Returns:
        429 response with ``Retry-After`` and rate limit headers.
    """
    assert isinstance(exc, RateLimitExceeded)
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        method=request.method,
        client_ip=get_remote_address(request),
        limit=str(exc.detail),
    )

    body = ErrorResponse(
        error="RATE_LIMIT_EXCEEDED",
        message=f"Too many requests ({exc.detail}). Please try again later.",
        request_id=getattr(request.state, "request_id", None),
    )
    response: Response = ORJSONResponse(
        status_code=429,
        content=body.model_dump(),
        headers={"Retry-After": str(DEFAULT_RETRY_AFTER_SECONDS)},
    )

    app_limiter: Limiter | None = getattr(request.app.state, "limiter", None)
    current_limit = getattr(request.state, "view_rate_limit", None)
    if app_limiter is not None and current_limit is not None:
        # Replaces the default Retry-After with the window's actual reset time
        response = app_limiter._inject_headers(response, current_limit)  # noqa: SLF001

    return response


def setup_rate_limiting(app: FastAPI, app_limiter: Limiter | None = None) -> None:
    """Configure rate limiting for the FastAPI application.

    Args:
        app: The FastAPI application instance.
        app_limiter: Limiter to install, the global one when None.
    """
    app.state.limiter = app_limiter or limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    logger.info(
        "Rate limiting configured",
        enabled=app.state.limiter.enabled,
    )


def _generation_limit() -> str:
    return get_settings().rate_limiting.generate


def rate_limit_generation() -> Any:
    """Apply the recipe generation limit (``rate_limiting.generate``).

    The limit string is read per request, so settings overrides apply
    without re-importing the endpoint module.
    """
    return limiter.limit(_generation_limit)
