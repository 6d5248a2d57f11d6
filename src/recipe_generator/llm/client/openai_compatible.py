"""HTTP client for OpenAI-compatible LLM servers.

Talks to any server exposing the ``/chat/completions`` and ``/models``
endpoints: LM Studio, llama.cpp, vLLM, or a hosted provider.
"""

from __future__ import annotations

from typing import Any, Final

import httpx
from aiolimiter import AsyncLimiter
from pydantic import ValidationError

from recipe_generator.llm.exceptions import (
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from recipe_generator.llm.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    LLMCompletionResult,
    ModelListResponse,
)
from recipe_generator.observability.logging import get_logger


logger = get_logger(__name__)

HEALTH_CHECK_TIMEOUT: Final[float] = 5.0


class OpenAICompatibleClient:
    """Async HTTP client for an OpenAI-compatible LLM server.

    Outbound requests are paced by an AsyncLimiter so a burst of incoming
    generations does not flood a single local GPU. Timeouts and connection
    errors are retried; HTTP errors are not.

    Attributes:
        base_url: API base URL including the version segment.
        model: Default model name.
        timeout: HTTP request timeout in seconds.
        max_retries: Maximum retry attempts for transient failures.
    """

    DEFAULT_BASE_URL = "http://localhost:1234/v1"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        model: str = "local-model",
        api_key: str | None = None,
        timeout: float = 120.0,
        max_retries: int = 2,
        requests_per_minute: float = 60.0,
        default_options: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL (e.g., http://localhost:1234/v1).
            model: Default model name.
            api_key: Optional bearer token; local servers usually need none.
            timeout: HTTP request timeout in seconds (default: 120).
            max_retries: Maximum retries for transient failures (default: 2).
            requests_per_minute: Outbound request pacing (default: 60).
            default_options: Sampling options applied when a call passes none.
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self.max_retries = max_retries
        self.default_options = default_options or {}
        self._http_client: httpx.AsyncClient | None = None
        # One request per (60/rpm) seconds, no initial burst
        self._rate_limiter = AsyncLimiter(1, 60.0 / requests_per_minute)

    @property
    def chat_url(self) -> str:
        """Get the chat completions endpoint URL."""
        return f"{self.base_url}/chat/completions"

    @property
    def models_url(self) -> str:
        """Get the model listing endpoint URL."""
        return f"{self.base_url}/models"

    async def initialize(self) -> None:
        """Initialize the HTTP client with connection pooling."""
        if self._http_client is not None:
            return

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers=headers,
            limits=httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
            ),
        )
        logger.info(
            "OpenAICompatibleClient initialized",
            base_url=self.base_url,
            model=self.model,
            timeout=self.timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client and release connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("OpenAICompatibleClient shutdown")

    async def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            await self.initialize()
        assert self._http_client is not None
        return self._http_client

    async def _execute_with_retry(
        self,
        request: ChatCompletionRequest,
    ) -> ChatCompletionResponse:
        """Execute request with retry logic for transient failures."""
        http_client = await self._get_http_client()
        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1):
            await self._rate_limiter.acquire()

            try:
                response = await http_client.post(
                    self.chat_url,
                    json=request.model_dump(exclude_none=True),
                )

                if response.status_code == 429:
                    retry_after = response.headers.get("retry-after")
                    msg = f"LLM rate limit exceeded, retry after {retry_after or 'unknown'}s"
                    raise LLMRateLimitError(msg, retry_after=retry_after)

                response.raise_for_status()
                return ChatCompletionResponse.model_validate(response.json())

            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    "LLM request timeout",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    timeout=self.timeout,
                )
                if attempt < self.max_retries:
                    continue
                msg = f"LLM timeout after {self.timeout}s"
                raise LLMTimeoutError(msg) from e

            except httpx.HTTPStatusError as e:
                logger.error(
                    "LLM request failed",
                    status_code=e.response.status_code,
                    url=self.chat_url,
                )
                msg = f"LLM returned {e.response.status_code}"
                raise LLMResponseError(msg) from e

            except httpx.RequestError as e:
                last_exception = e
                logger.warning(
                    "LLM connection error",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                if attempt < self.max_retries:
                    continue
                msg = f"Cannot connect to LLM at {self.base_url}: {e}"
                raise LLMUnavailableError(msg) from e

            except (ValueError, ValidationError) as e:
                msg = f"LLM returned an unreadable completion body: {e}"
                raise LLMResponseError(msg) from e

        msg = "Max retries exceeded"
        raise LLMUnavailableError(msg) from last_exception

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
            prompt: Input prompt text, sent as the user message.
            model: Model to use (defaults to client's default model).
            system: Optional system prompt.
            options: Sampling options: temperature, top_p, max_tokens.

        Returns:
            LLMCompletionResult with the raw response text.

        Raises:
            LLMUnavailableError: If the server cannot be reached.
            LLMTimeoutError: If the request times out.
            LLMRateLimitError: If the server answers 429.
            LLMResponseError: If the server returns an error or no content.
        """
        use_model = model or self.model
        sampling = {**self.default_options, **(options or {})}

        messages: list[ChatMessage] = []
        if system:
            messages.append(ChatMessage(role="system", content=system))
        messages.append(ChatMessage(role="user", content=prompt))

        request = ChatCompletionRequest(
            model=use_model,
            messages=messages,
            temperature=sampling.get("temperature"),
            top_p=sampling.get("top_p"),
            max_tokens=sampling.get("max_tokens"),
        )

        response = await self._execute_with_retry(request)

        if not response.choices or response.choices[0].message.content is None:
            msg = "LLM response contained no message content"
            raise LLMResponseError(msg)

        choice = response.choices[0]
        usage = response.usage
        return LLMCompletionResult(
            raw_response=choice.message.content or "",
            model=response.model or use_model,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
            finish_reason=choice.finish_reason,
        )

    async def list_models(self) -> list[str]:
        """Return the model identifiers the server serves.

        Returns:
            Model IDs, or an empty list when the server cannot be queried.
        """
        http_client = await self._get_http_client()
        try:
            response = await http_client.get(self.models_url, timeout=HEALTH_CHECK_TIMEOUT)
            response.raise_for_status()
            listing = ModelListResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.warning("Failed to list LLM models", url=self.models_url, error=str(e))
            return []
        return [entry.id for entry in listing.data]

    async def check_health(self) -> bool:
        """Return True if the model listing answers with a 2xx status."""
        http_client = await self._get_http_client()
        try:
            response = await http_client.get(self.models_url, timeout=HEALTH_CHECK_TIMEOUT)
        except httpx.HTTPError as e:
            logger.debug("LLM health check failed", url=self.models_url, error=str(e))
            return False
        return response.is_success
