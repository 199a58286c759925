"""
API router for the chat assistant.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from spirolink.chat.openai_adapter import OpenAIAdapter
from spirolink.chat.service import CompletionClient
from spirolink.shared.dependencies import get_app_settings

router = APIRouter(tags=["chat"])


class ChatBody(BaseModel):
    message: Optional[str] = None


class ChatReply(BaseModel):
    success: bool = True
    reply: str


def get_completion_client(request: Request) -> CompletionClient:
    """Dependency for the completion client, built once per application."""
    client = getattr(request.app.state, "completion_client", None)
    if client is None:
        settings = get_app_settings(request)
        client = CompletionClient(
            OpenAIAdapter(
                api_key=settings.openai_api_key,
                default_model=settings.openai_model,
                timeout_seconds=settings.openai_timeout_seconds,
                base_url=settings.openai_base_url,
            )
        )
        request.app.state.completion_client = client
    return client


@router.post("/chat", response_model=ChatReply)
async def chat(
    client: Annotated[CompletionClient, Depends(get_completion_client)],
    body: Optional[ChatBody] = None,
) -> ChatReply:
    reply = await client.reply(body.message if body else None)
    return ChatReply(reply=reply)
