"""API v1 router aggregating all endpoint routers.

Mounted under ``settings.api.v1_prefix`` (``/api/v1/recipe-guide`` by default).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_guide.api.v1.endpoints import combinations, health, steps


router = APIRouter()

router.include_router(health.router)
router.include_router(steps.router)
router.include_router(combinations.router)
