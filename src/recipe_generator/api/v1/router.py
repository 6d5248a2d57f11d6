"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the configured v1_prefix (default /api/v1).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_generator.api.v1.endpoints import health, recipes, shopping, system


router = APIRouter()

router.include_router(health.router)
router.include_router(system.router)
router.include_router(recipes.router)
router.include_router(shopping.router)
