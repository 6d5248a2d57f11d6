"""LLM client data models.

Request/response models for the OpenAI-compatible chat completions API
and the internal completion result.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# OpenAI-compatible Chat API Models
# =============================================================================


class ChatMessage(BaseModel):
    """Single message in chat format."""

    role: str = Field(..., description="Message role: system, user, or assistant")
    content: str | None = Field(default=None, description="Message content")


class ChatCompletionRequest(BaseModel):
    """Request body for the /chat/completions endpoint."""

    model: str = Field(..., description="Model name")
    messages: list[ChatMessage] = Field(..., description="Chat messages")
    temperature: float | None = Field(default=None, description="Sampling temperature")
    top_p: float | None = Field(default=None, description="Nucleus sampling mass")
    max_tokens: int | None = Field(default=None, description="Maximum tokens to generate")
    stream: bool = Field(default=False, description="Whether to stream response")


class ChatUsage(BaseModel):
    """Token usage, when the server reports it."""

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


class ChatChoice(BaseModel):
    """Single choice in a chat completion response."""

    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    """Response from the /chat/completions endpoint.

    Local servers omit fields the hosted API always sends, so everything
    but ``choices`` is optional.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    model: str | None = None
    choices: list[ChatChoice] = Field(..., description="Generated completions")
    usage: ChatUsage | None = None
    created: int | None = None


class ModelInfo(BaseModel):
    """One entry of the /models listing."""

    model_config = ConfigDict(extra="ignore")

    id: str


class ModelListResponse(BaseModel):
    """Response from the /models endpoint."""

    model_config = ConfigDict(extra="ignore")

    data: list[ModelInfo] = Field(default_factory=list)


# =============================================================================
# Internal Result
# =============================================================================


class LLMCompletionResult(BaseModel):
    """Internal result from an LLM completion."""

    model_config = ConfigDict(frozen=True)

    raw_response: str = Field(..., description="Raw text response from LLM")
    model: str = Field(..., description="Model that generated response")
    prompt_tokens: int | None = Field(default=None, description="Input token count")
    completion_tokens: int | None = Field(default=None, description="Output token count")
    finish_reason: str | None = Field(default=None, description="Why generation stopped")
