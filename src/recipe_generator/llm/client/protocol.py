"""LLM Client Protocol definition.

Defines the interface LLM clients implement so the generation service and
health endpoints can work against any backend or a test double.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from recipe_generator.llm.models import LLMCompletionResult


@runtime_checkable
class LLMClientProtocol(Protocol):
    """Protocol for LLM client implementations.

    Key methods:
    - generate: Plain text completion for a prompt
    - list_models / check_health: Backend status for health endpoints
    - initialize/shutdown: Lifecycle management for connection pools
    """

    model: str
    base_url: str

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connections, etc.)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

    async def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        system: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate a text completion.

        Args:
            prompt: Input prompt text.
            model: Model override (uses client default if None).
            system: Optional system prompt.
            options: Sampling options (temperature, top_p, max_tokens).

        Returns:
            LLMCompletionResult with the raw response text.

        Raises:
            LLMUnavailableError: Service unreachable.
            LLMTimeoutError: Request timed out.
            LLMRateLimitError: Service answered 429.
            LLMResponseError: HTTP error or unusable response body.
        """
        ...

    async def list_models(self) -> list[str]:
        """Return the model identifiers the backend serves, empty on error."""
        ...

    async def check_health(self) -> bool:
        """Return True if the backend answers its model listing."""
        ...
