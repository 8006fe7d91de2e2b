"""
Chat domain models and schemas.

Request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime

from pydantic import Field, field_validator

from backend.models.common import CamelModel, utc_now


class ChatRequest(CamelModel):
    """Request schema for chat messages."""

    message: str = Field(min_length=1, description="User message")
    session_id: str | None = Field(default=None, description="Existing session ID")
    use_rag: bool = Field(default=False, alias="useRAG", description="Retrieve document context")

    @field_validator("message")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message cannot be empty")
        return value


class ContextUsage(CamelModel):
    """How much retrieved context went into an answer."""

    chunks: int = Field(description="Number of chunks injected into the prompt")
    sources: list[str] = Field(default_factory=list, description="Distinct source document names")


class ChatResponse(CamelModel):
    """Response schema for chat messages."""

    session_id: str
    user_message: str
    ai_response: str
    timestamp: datetime = Field(default_factory=utc_now)
    rag_enabled: bool = Field(description="True when retrieved context was injected")
    context_used: ContextUsage | None = None
