"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: configure logging, build the LLM client and services
- Application shutdown: close the LLM client's HTTP connections
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_generator.core.config import Settings, get_settings
from recipe_generator.llm.client.openai_compatible import OpenAICompatibleClient
from recipe_generator.observability.logging import get_logger, setup_logging
from recipe_generator.services.generation.service import RecipeGenerationService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    app.state.llm_client = None
    app.state.generation_service = None

    # LLM is optional: generation answers 503 without it
    if settings.llm.enabled:
        try:
            await _init_llm(app, settings)
        except Exception:
            logger.exception("Failed to initialize LLM client - generation unavailable")
            app.state.llm_client = None
            app.state.generation_service = None
    else:
        logger.info("LLM disabled by configuration")

    logger.info("Application startup complete")


async def _init_llm(app: FastAPI, settings: Settings) -> None:
    """Build the LLM client and the generation service on top of it."""
    llm_client = OpenAICompatibleClient(
        base_url=settings.llm.base_url,
        model=settings.llm.model,
        api_key=settings.LLM_API_KEY or None,
        timeout=settings.llm.timeout,
        max_retries=settings.llm.max_retries,
        requests_per_minute=settings.llm.requests_per_minute,
        default_options={
            "temperature": settings.llm.temperature,
            "top_p": settings.llm.top_p,
            "max_tokens": settings.llm.max_tokens,
        },
    )
    await llm_client.initialize()

    app.state.llm_client = llm_client
    app.state.generation_service = RecipeGenerationService(llm_client=llm_client)

    logger.info(
        "LLM client initialized",
        base_url=settings.llm.base_url,
        model=settings.llm.model,
        authenticated=bool(settings.LLM_API_KEY),
    )


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services.

    Args:
        app: The FastAPI application instance.
    """
    logger.info("Shutting down application")

    llm_client = getattr(app.state, "llm_client", None)
    if llm_client is not None:
        await llm_client.shutdown()
        app.state.llm_client = None
        app.state.generation_service = None
        logger.debug("LLM client shutdown")

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Uses the settings the app was created with, falling back to
    ``get_settings()``.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
