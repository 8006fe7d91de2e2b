"""
LLM completion client.

Sends a system prompt and a user message to a LangChain chat model and
returns the reply text. Failures surface as ProviderError and are not
retried here.

Dependencies: langchain_core, langchain_google_genai
System role: LLM collaborator for chat answers
"""

import logging

from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from backend.configs.llm import LLMSettings
from backend.core.exceptions import ProviderError

from .rag_prompt import CHAT_PROMPT

logger = logging.getLogger(__name__)


class LLMClient:
    """(system prompt, user message) -> reply text."""

    def __init__(self, model: BaseChatModel, provider: str = "google_genai") -> None:
        self._model = model
        self._provider = provider

    def complete(self, system_prompt: str, user_message: str) -> str:
        """
        Generate a reply.

        Args:
            system_prompt: Instructions (and any retrieved context)
            user_message: The user's message

        Returns:
            str: Reply text

        Raises:
            ProviderError: The model call failed
        """
        messages = CHAT_PROMPT.format_messages(
            system_prompt=system_prompt,
            user_message=user_message,
        )
        try:
            response = self._model.invoke(messages)
        except Exception as e:
            logger.error(
                f"{__name__}:complete - LLM call failed",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
            raise ProviderError(f"LLM request failed: {e}", provider=self._provider) from e

        return _content_text(response.content)


def _content_text(content) -> str:
    # Gemini may return a list of content parts instead of a string.
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


def create_chat_model(settings: LLMSettings) -> ChatGoogleGenerativeAI:
    """Build the production chat model."""
    return ChatGoogleGenerativeAI(
        model=settings.model,
        temperature=settings.temperature,
        max_output_tokens=settings.max_output_tokens,
    )
