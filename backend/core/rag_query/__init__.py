"""
RAG query support: prompt construction and the LLM completion client.
"""

from .llm_client import LLMClient, create_chat_model
from .rag_prompt import GENERIC_SYSTEM_PROMPT, build_rag_system_prompt, format_context

__all__ = [
    "LLMClient",
    "create_chat_model",
    "GENERIC_SYSTEM_PROMPT",
    "build_rag_system_prompt",
    "format_context",
]
