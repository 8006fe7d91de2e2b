"""
Core business logic module.

Contains domain business logic, exception hierarchy, and core components.
All business rules and domain-specific logic reside here.
"""

from backend.core.exceptions import (
    BackendUnavailableError,
    BlobStorageError,
    ConfigurationError,
    DocumentNotFoundError,
    DocumentProcessingError,
    ExtractionError,
    ProviderError,
    RagChatException,
    UnsupportedMediaTypeError,
    ValidationError,
    VectorStoreError,
)

__all__ = [
    "RagChatException",
    "ValidationError",
    "ConfigurationError",
    "BackendUnavailableError",
    "DocumentNotFoundError",
    "DocumentProcessingError",
    "ExtractionError",
    "UnsupportedMediaTypeError",
    "ProviderError",
    "VectorStoreError",
    "BlobStorageError",
]
