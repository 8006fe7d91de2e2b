"""API-specific dependencies."""

from .dependencies import (
    AppContext,
    build_app_context,
    get_app_context,
    get_chat_service,
    get_coordinator,
    get_document_service,
    get_settings_dependency,
)

__all__ = [
    "AppContext",
    "build_app_context",
    "get_app_context",
    "get_chat_service",
    "get_coordinator",
    "get_document_service",
    "get_settings_dependency",
]
