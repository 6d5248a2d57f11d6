"""Shared test fixtures and configuration for the Recipe Generator service tests.

APP_ENV is forced to ``test`` before any application module is imported, so
settings load config/environments/test/ (metrics off, LLM disabled, high
rate limits).
"""

from __future__ import annotations

import os


os.environ["APP_ENV"] = "test"

from typing import TYPE_CHECKING  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from recipe_generator.core.config import Settings, get_settings  # noqa: E402
from recipe_generator.factory import create_app  # noqa: E402
from recipe_generator.llm.models import LLMCompletionResult  # noqa: E402
from recipe_generator.schemas.recipe import Recipe, RecipeIngredient  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI


@pytest.fixture
def test_settings() -> Settings:
    """Settings loaded for the test environment."""
    return get_settings()


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Application instance without lifespan services.

    ASGITransport does not run the lifespan, so app.state holds no LLM
    client; tests install doubles through dependency_overrides.
    """
    return create_app(test_settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client talking to the app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as http_client:
        yield http_client


@pytest.fixture
def mock_llm_client() -> MagicMock:
    """LLM client double answering with a complete JSON recipe."""
    llm_client = MagicMock()
    llm_client.model = "local-model"
    llm_client.base_url = "http://localhost:1234/v1"
    llm_client.generate = AsyncMock(
        return_value=LLMCompletionResult(
            raw_response=(
                '{"name": "Garlic Chicken", '
                '"ingredients": [{"name": "chicken breast", "quantity": "2"}], '
                '"instructions": ["Cook the chicken."]}'
            ),
            model="local-model",
            prompt_tokens=120,
            completion_tokens=60,
        )
    )
    llm_client.check_health = AsyncMock(return_value=True)
    llm_client.list_models = AsyncMock(return_value=["local-model"])
    return llm_client


@pytest.fixture
def sample_recipe() -> Recipe:
    """A complete recipe."""
    return Recipe(
        name="Garlic Chicken",
        ingredients=[
            RecipeIngredient(name="chicken breast", quantity="2"),
            RecipeIngredient(name="garlic", quantity="3 cloves"),
            RecipeIngredient(name="olive oil", quantity="2 tbsp"),
            RecipeIngredient(name="salt", quantity="to taste"),
        ],
        instructions=["Season the chicken.", "Sear in oil with garlic."],
        dietary_preference=["Gluten-Free"],
    )
