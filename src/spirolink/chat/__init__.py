"""
Chat completion gateway and HTTP endpoint.
"""

from spirolink.chat.models import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    EmptyCompletionError,
    LLMAuthenticationError,
    LLMError,
    LLMProvider,
    LLMProviderError,
    LLMRateLimitError,
    LLMTimeoutError,
    MessageRole,
)
from spirolink.chat.openai_adapter import OpenAIAdapter
from spirolink.chat.service import CompletionClient

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "CompletionClient",
    "EmptyCompletionError",
    "LLMAuthenticationError",
    "LLMError",
    "LLMProvider",
    "LLMProviderError",
    "LLMRateLimitError",
    "LLMTimeoutError",
    "MessageRole",
    "OpenAIAdapter",
]
