"""Integration test fixtures.

The application is built through ``create_app`` with explicit test settings
and driven over ASGI, so the whole middleware and handler stack runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from recipe_guide.core.config import Settings
from recipe_guide.core.config.settings import (
    ApiSettings,
    AppSettings,
    LoggingSettings,
    RecipeGuideSettings,
)
from recipe_guide.factory import create_app


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI


pytestmark = pytest.mark.integration

API_PREFIX = "/api/v1/recipe-guide"


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a low combination warning threshold."""
    return Settings(
        APP_ENV="test",
        app=AppSettings(name="test-app", version="0.0.1-test"),
        api=ApiSettings(v1_prefix=API_PREFIX, cors_origins=["http://localhost:3000"]),
        logging=LoggingSettings(level="WARNING", format="text"),
        recipe_guide=RecipeGuideSettings(
            combination_warning_threshold=4,
            lenient_empty_groups=False,
        ),
    )


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Create FastAPI app with test settings."""
    return create_app(test_settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def step_type_payload() -> list[dict]:
    """Step type catalog as the console sends it."""
    return [
        {"id": "milk", "code": "M", "category": "ingredient"},
        {"id": "syrup", "code": "S", "category": "ingredient"},
        {
            "id": "cup",
            "code": "[",
            "category": "equipment",
            "isContainer": True,
            "containerSuffix": "]",
        },
    ]


@pytest.fixture
def modifier_group_payload() -> list[dict]:
    """Size (3 options) and sweetness (2 options) groups."""
    return [
        {
            "id": "size",
            "name": "Size",
            "options": [
                {"id": "large", "displayName": "Large", "displayOrder": 3},
                {"id": "small", "displayName": "Small", "displayOrder": 1},
                {"id": "medium", "displayName": "Medium", "displayOrder": 2},
            ],
        },
        {
            "id": "sweet",
            "name": "Sweetness",
            "options": [
                {"id": "normal", "displayName": "Normal", "displayOrder": 1},
                {"id": "less", "displayName": "Less sugar", "displayOrder": 2},
            ],
        },
    ]
