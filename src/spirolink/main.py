"""
FastAPI application entry point.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from spirolink import __version__
from spirolink.chat.models import LLMError
from spirolink.chat.router import router as chat_router
from spirolink.config import Settings, get_settings
from spirolink.contact.router import router as contact_router
from spirolink.email.dispatch import ProviderSendError
from spirolink.email.selector import ProviderState, select_provider
from spirolink.shared.dependencies import get_provider_state
from spirolink.shared.exceptions import ConfigurationError, ValidationError
from spirolink.shared.logging import get_logger, setup_logging
from spirolink.shared.middleware import CORRELATION_ID_HEADER, CorrelationIdMiddleware

logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Provider selection completes before the app starts serving; requests that
    arrive earlier read the DISABLED state set in create_app.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    settings.require_openai_key()

    app.state.provider_state = await select_provider(settings)

    logger.info(
        f"{settings.brand_name} Backend Running",
        extra={
            "port": settings.port,
            "email_service": app.state.provider_state.service_name,
            "routes": ["POST /contact", "POST /chat", "GET /health"],
        },
    )

    yield

    logger.info("Shutting down application")
    provider = app.state.provider_state.provider
    if provider is not None:
        await provider.close()
    logger.info("Application shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=f"{settings.brand_name} Backend",
        description="Chat assistant and contact-form relay",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.provider_state = ProviderState.disabled()

    @app.exception_handler(ValidationError)
    async def _validation(_: Request, exc: ValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(
            "Request validation failed",
            extra={"path": request.url.path, "errors": exc.errors()},
        )
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(ProviderSendError)
    async def _provider_send(_: Request, exc: ProviderSendError) -> JSONResponse:
        logger.error(
            "Contact form error",
            extra={"provider": exc.provider.value, "error": exc.cause},
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Failed to send email: {exc.cause}")

    @app.exception_handler(LLMError)
    async def _llm(_: Request, exc: LLMError) -> JSONResponse:
        logger.error(
            "Chat error",
            extra={"error": str(exc), "correlation_id": exc.correlation_id},
        )
        return _error(exc.status_code, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error(exc.status_code, "Not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        # Runs in ServerErrorMiddleware, outside the correlation middleware's context.
        logger.exception(
            "Unhandled error",
            extra={
                "path": request.url.path,
                "request_id": request.headers.get(CORRELATION_ID_HEADER),
            },
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(chat_router)
    app.include_router(contact_router)

    @app.get("/health")
    async def health_check(request: Request) -> dict[str, object]:
        app_settings: Settings = request.app.state.settings
        return {
            "status": "OK",
            "backend": app_settings.brand_name,
            "emailService": get_provider_state(request).service_name,
            "openaiConfigured": app_settings.openai_configured,
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: validate configuration, then serve with uvicorn."""
    import uvicorn

    settings = get_settings()
    try:
        settings.require_openai_key()
    except ConfigurationError as e:
        setup_logging(settings.log_level)
        logger.critical(e.message)
        raise SystemExit(1) from e
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
