"""
FastAPI dependencies reading process-wide state from the application.
"""

from fastapi import Request

from spirolink.config import Settings, get_settings
from spirolink.email.selector import ProviderState


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


def get_provider_state(request: Request) -> ProviderState:
    """Provider state selected at startup; DISABLED until selection completes."""
    state = getattr(request.app.state, "provider_state", None)
    return state if state is not None else ProviderState.disabled()
