"""
Completion client for the chat feature.

Stateless call-through: one trimmed user message, fixed system prompt,
temperature and output cap; the first completion's text is returned.
"""

from spirolink.chat.gateway import LLMGateway
from spirolink.chat.models import (
    ChatMessage,
    ChatRequest,
    EmptyCompletionError,
    MessageRole,
)
from spirolink.shared.exceptions import ValidationError
from spirolink.shared.logging import get_logger
from spirolink.shared.middleware import get_correlation_id

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant for SPIROLINK, a broadband infrastructure company."
)
TEMPERATURE = 0.7
MAX_TOKENS = 500


class CompletionClient:
    """Answers one chat message through the configured LLM gateway."""

    def __init__(self, gateway: LLMGateway, system_prompt: str = SYSTEM_PROMPT) -> None:
        self._gateway = gateway
        self._system_prompt = system_prompt

    async def reply(self, message: str | None) -> str:
        """Return the assistant reply for a single user message.

        Raises:
            ValidationError: The message is empty after trimming.
            EmptyCompletionError: The provider returned no content.
            LLMError: Upstream failures, passed through unchanged.
        """
        text = (message or "").strip()
        if not text:
            raise ValidationError("Message is required")

        request = ChatRequest(
            messages=[
                ChatMessage(role=MessageRole.SYSTEM, content=self._system_prompt),
                ChatMessage(role=MessageRole.USER, content=text),
            ],
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
        )
        # Upstream calls share the HTTP request id when one is bound.
        request_id = get_correlation_id()
        if request_id:
            request = request.model_copy(update={"correlation_id": request_id})
        response = await self._gateway.chat_completion(request)

        if not response.content:
            logger.error(
                "Empty completion",
                extra={"correlation_id": request.correlation_id},
            )
            raise EmptyCompletionError(
                "No response from OpenAI",
                correlation_id=request.correlation_id,
                provider=response.provider,
            )
        return response.content
