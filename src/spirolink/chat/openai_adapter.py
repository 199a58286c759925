"""
OpenAI adapter for the chat-completion gateway.

One HTTP call per request, no retries: authentication, rate-limit and other
upstream failures are raised as distinct LLMError subclasses.
"""

from __future__ import annotations

import time
from typing import Any

import httpx

from spirolink.chat.models import (
    ChatRequest,
    ChatResponse,
    LLMAuthenticationError,
    LLMProvider,
    LLMProviderError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from spirolink.shared.logging import get_logger

logger = get_logger(__name__)

OPENAI_API_BASE = "https://api.openai.com/v1"


class OpenAIAdapter:
    """OpenAI adapter implementing the LLM gateway interface."""

    def __init__(
        self,
        api_key: str,
        default_model: str = "gpt-4o-mini",
        timeout_seconds: float = 30.0,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize OpenAI adapter.

        Args:
            api_key: OpenAI API key.
            default_model: Default model to use.
            timeout_seconds: Request timeout in seconds.
            base_url: Optional custom base URL for API.
            transport: Optional injected transport (for fast deterministic tests).
        """
        self._api_key = api_key
        self._default_model = default_model
        self._timeout_seconds = timeout_seconds
        self._base_url = (base_url or OPENAI_API_BASE).rstrip("/")
        self._chat_endpoint = f"{self._base_url}/chat/completions"
        self._transport = transport

    @property
    def provider(self) -> LLMProvider:
        return LLMProvider.OPENAI

    @property
    def default_model(self) -> str:
        return self._default_model

    async def chat_completion(self, request: ChatRequest) -> ChatResponse:
        """Execute a chat completion request to OpenAI."""
        start_time = time.monotonic()
        model = request.model or self._default_model

        payload: dict[str, Any] = {
            "model": model,
            "messages": [{"role": m.role.value, "content": m.content} for m in request.messages],
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        logger.info(
            "OpenAI chat completion request",
            extra={
                "correlation_id": request.correlation_id,
                "model": model,
                "message_count": len(request.messages),
            },
        )

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(self._chat_endpoint, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(
                "OpenAI request timeout",
                extra={"correlation_id": request.correlation_id},
            )
            raise LLMTimeoutError(
                f"Request timed out after {self._timeout_seconds}s",
                correlation_id=request.correlation_id,
                provider=self.provider,
                original_error=e,
            )
        except httpx.HTTPError as e:
            logger.error(
                "OpenAI request failed",
                extra={"correlation_id": request.correlation_id, "error": str(e)},
            )
            raise LLMProviderError(
                f"OpenAI request failed: {e}",
                correlation_id=request.correlation_id,
                provider=self.provider,
                original_error=e,
            )

        self._raise_for_status(response, request.correlation_id)

        latency_ms = (time.monotonic() - start_time) * 1000
        data = self._parse_body(response, request.correlation_id)
        choices = data.get("choices") or []
        content = None
        if choices and isinstance(choices[0], dict):
            content = (choices[0].get("message") or {}).get("content")
        usage = data.get("usage") or {}

        logger.info(
            "OpenAI chat completion success",
            extra={
                "correlation_id": request.correlation_id,
                "model": model,
                "latency_ms": latency_ms,
            },
        )

        return ChatResponse(
            content=content,
            model=model,
            provider=self.provider,
            usage={
                "prompt_tokens": usage.get("prompt_tokens", 0),
                "completion_tokens": usage.get("completion_tokens", 0),
                "total_tokens": usage.get("total_tokens", 0),
            },
            correlation_id=request.correlation_id,
            latency_ms=latency_ms,
        )

    def _parse_body(self, response: httpx.Response, correlation_id: str) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.error(
                "OpenAI returned a malformed body",
                extra={
                    "correlation_id": correlation_id,
                    "content_type": response.headers.get("Content-Type"),
                },
            )
            raise LLMProviderError(
                "OpenAI API error: malformed response body",
                correlation_id=correlation_id,
                provider=self.provider,
            )
        return data

    def _raise_for_status(self, response: httpx.Response, correlation_id: str) -> None:
        if response.status_code == 200:
            return

        if response.status_code == 401:
            logger.error(
                "OpenAI authentication failed",
                extra={"correlation_id": correlation_id},
            )
            raise LLMAuthenticationError(
                "Invalid OpenAI API key",
                correlation_id=correlation_id,
                provider=self.provider,
            )

        if response.status_code == 429:
            retry_after_header = response.headers.get("Retry-After")
            try:
                retry_after = float(retry_after_header) if retry_after_header else None
            except ValueError:
                retry_after = None
            logger.error(
                "OpenAI rate limited",
                extra={"correlation_id": correlation_id, "retry_after": retry_after},
            )
            raise LLMRateLimitError(
                "Rate limited by OpenAI, please try again later",
                retry_after=retry_after,
                correlation_id=correlation_id,
                provider=self.provider,
            )

        try:
            error_data = response.json()
        except ValueError:
            error_data = {}
        error_msg = ""
        error = error_data.get("error") if isinstance(error_data, dict) else None
        if isinstance(error, dict):
            error_msg = str(error.get("message", ""))
        error_msg = error_msg or response.text or f"HTTP {response.status_code}"
        logger.error(
            "OpenAI provider error",
            extra={
                "correlation_id": correlation_id,
                "status_code": response.status_code,
                "error": error_msg,
            },
        )
        raise LLMProviderError(
            f"OpenAI API error: {error_msg}",
            correlation_id=correlation_id,
            provider=self.provider,
        )
