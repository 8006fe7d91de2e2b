"""
LLM configuration settings.

Chat model parameters for the completion collaborator.

Dependencies: pydantic_settings
System role: LLM configuration for chat answers
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    model: str = Field(default="gemini-2.5-flash", description="Google chat model ID")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_output_tokens: int = Field(default=1000, description="Maximum tokens per answer")
    system_prompt: str = Field(
        default=(
            "You are a helpful AI assistant. Provide accurate and helpful "
            "responses to user questions."
        ),
        description="Generic system prompt used when no retrieved context is injected",
    )
