"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

import os

# The application module builds its FastAPI app at import time.
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from spirolink.chat.openai_adapter import OpenAIAdapter
from spirolink.chat.service import CompletionClient
from spirolink.config import Settings
from spirolink.email.interfaces import (
    EmailFailure,
    EmailMessage,
    EmailProvider,
    EmailResult,
    ProviderType,
)
from spirolink.email.selector import ProviderState
from spirolink.main import create_app

EMAIL_ENV_VARS = (
    "RESEND_API_KEY",
    "SENDGRID_API_KEY",
    "EMAIL_USER",
    "EMAIL_PASSWORD",
)


class SpyEmailProvider(EmailProvider):
    """Recording email provider: every send attempt is kept in `sent`."""

    def __init__(
        self,
        provider_type: ProviderType = ProviderType.RESEND,
        fail_on_attempt: int | None = None,
        failure: EmailFailure = EmailFailure.NETWORK,
        error_message: str = "Spy failure",
    ) -> None:
        self._provider_type = provider_type
        self._fail_on_attempt = fail_on_attempt
        self._failure = failure
        self._error_message = error_message
        self.sent: list[EmailMessage] = []
        self.verify_calls = 0
        self.closed = False

    @property
    def provider_type(self) -> ProviderType:
        return self._provider_type

    @property
    def default_from(self) -> str:
        return "spy@spirolink.test"

    async def send(self, message: EmailMessage) -> EmailResult:
        self.sent.append(message)
        if self._fail_on_attempt is not None and len(self.sent) == self._fail_on_attempt:
            return EmailResult.failed(self._failure, self._error_message)
        return EmailResult(success=True, provider_message_id=f"spy-{len(self.sent)}")

    async def verify(self) -> bool:
        self.verify_calls += 1
        return True

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def clean_email_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's real mail credentials out of the tests."""
    for name in EMAIL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, openai_api_key="test-openai-key")


@pytest.fixture
def spy_factory() -> Callable[..., SpyEmailProvider]:
    return SpyEmailProvider


@pytest.fixture
def spy_provider() -> SpyEmailProvider:
    return SpyEmailProvider()


@pytest.fixture
def openai_handler() -> Callable[[httpx.Request], httpx.Response]:
    """Default upstream: one successful completion."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "choices": [
                    {"index": 0, "message": {"role": "assistant", "content": "Hi from SPIROLINK"}}
                ],
                "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
            },
        )

    return handler


@pytest.fixture
def app(settings: Settings, openai_handler: Callable[[httpx.Request], httpx.Response]) -> FastAPI:
    application = create_app(settings)
    application.state.completion_client = CompletionClient(
        OpenAIAdapter(
            api_key=settings.openai_api_key,
            transport=httpx.MockTransport(openai_handler),
        )
    )
    return application


@pytest.fixture
def use_provider(app: FastAPI) -> Callable[[EmailProvider, bool], None]:
    def _use(provider: EmailProvider, verified: bool = True) -> None:
        app.state.provider_state = ProviderState(provider.provider_type, provider, verified)

    return _use


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client
