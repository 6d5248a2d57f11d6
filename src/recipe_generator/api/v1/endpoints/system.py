"""System status endpoint.

Reports LLM backend connectivity and the models it serves, for operators
and for the UI's status indicator.
"""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from recipe_generator.api.dependencies import get_app_settings
from recipe_generator.core.config import Settings
from recipe_generator.observability.logging import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/system", tags=["system"])

LLMConnectionState = Literal["connected", "disconnected", "disabled"]


class SystemStatusResponse(BaseModel):
    """LLM backend status."""

    llm: LLMConnectionState = Field(..., description="Backend connectivity")
    llm_base_url: str = Field(..., description="Configured backend base URL")
    default_model: str = Field(..., description="Model used for generation")
    models: list[str] | None = Field(
        default=None, description="Models served, when the backend is connected"
    )


@router.get(
    "/status",
    response_model=SystemStatusResponse,
    summary="LLM backend status",
)
async def system_status(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SystemStatusResponse:
    """Report whether the LLM backend answers and which models it serves."""
    llm_client = getattr(request.app.state, "llm_client", None)

    if not settings.llm.enabled:
        state: LLMConnectionState = "disabled"
        models = None
    elif llm_client is not None and await llm_client.check_health():
        state = "connected"
        models = await llm_client.list_models()
    else:
        state = "disconnected"
        models = None
        logger.warning("LLM backend unreachable", base_url=settings.llm.base_url)

    return SystemStatusResponse(
        llm=state,
        llm_base_url=settings.llm.base_url,
        default_model=settings.llm.model,
        models=models,
    )
