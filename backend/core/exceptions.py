"""
Exception hierarchy for the RAG chat API.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RagChatException(Exception):
    """Base exception for all RAG chat application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(RagChatException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(RagChatException):
    """
    Raised on fatal configuration problems.

    Covers embedding dimension drift between the provider and the stored
    schema, and invalid chunking parameters. Never recovered per call.
    """

    pass


class BackendUnavailableError(RagChatException):
    """Raised when the persistent vector backend cannot be reached or bootstrapped."""

    def __init__(
        self,
        message: str,
        backend: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if backend:
            details["backend"] = backend
        super().__init__(message, details)


class DocumentNotFoundError(RagChatException):
    """Raised when a document cannot be found."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize document not found error.

        Args:
            document_id: ID of the missing document
            details: Additional context
        """
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)


class DocumentProcessingError(RagChatException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            stage: Pipeline stage that failed (extract, chunk, embed, store)
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        if stage:
            details["stage"] = stage
        super().__init__(message, details)
        self.document_id = document_id
        self.stage = stage


class ExtractionError(DocumentProcessingError):
    """Raised when text cannot be extracted from document content."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        media_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if media_type:
            details["media_type"] = media_type
        super().__init__(message, document_id, "extract", details)


class UnsupportedMediaTypeError(ExtractionError):
    """Raised when the declared media type has no extractor."""

    def __init__(
        self,
        media_type: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Unsupported file type: {media_type}",
            document_id=document_id,
            media_type=media_type,
            details=details,
        )
        self.media_type = media_type


class ProviderError(RagChatException):
    """Raised when an embedding or LLM provider call fails."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class VectorStoreError(RagChatException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (add, search, delete, stats)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class BlobStorageError(RagChatException):
    """Raised when blob object store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
