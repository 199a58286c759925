"""
LLM gateway interface definition.
"""

from typing import Protocol, runtime_checkable

from spirolink.chat.models import ChatRequest, ChatResponse, LLMProvider


@runtime_checkable
class LLMGateway(Protocol):
    """Protocol for chat-completion adapters."""

    @property
    def provider(self) -> LLMProvider:
        """Get the LLM provider type."""
        ...

    @property
    def default_model(self) -> str:
        """Get the default model for this provider."""
        ...

    async def chat_completion(self, request: ChatRequest) -> ChatResponse:
        """Execute a chat completion request.

        Raises:
            LLMTimeoutError: If the request times out.
            LLMRateLimitError: If rate limited by the provider.
            LLMAuthenticationError: If authentication fails.
            LLMProviderError: For other provider errors.
        """
        ...
