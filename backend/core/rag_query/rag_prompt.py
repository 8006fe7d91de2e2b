"""
RAG prompt construction.

Builds the system prompt that grounds an answer in retrieved chunks. Each
chunk is rendered as a numbered "Context N" block with its source name.

Dependencies: langchain_core.prompts
System role: Prompt templates for chat answers
"""

from typing import Sequence

from langchain_core.prompts import ChatPromptTemplate, PromptTemplate

from backend.boundary.vdb.vector_schemas import VectorSearchResult

GENERIC_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Provide accurate and helpful responses to user questions."
)

RAG_SYSTEM_TEMPLATE = PromptTemplate.from_template(
    """You are a helpful AI assistant with access to relevant documents. \
Use the following context to answer the user's question.

{context}

Instructions:
- Prefer the information in the context above when it is relevant to the question.
- If the context does not fully answer the question, say so and answer from your general knowledge.
- Be accurate and concise."""
)

CHAT_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{system_prompt}"),
        ("human", "{user_message}"),
    ]
)


def format_context(results: Sequence[VectorSearchResult]) -> str:
    """Render retrieved chunks as numbered context blocks."""
    blocks = []
    for number, result in enumerate(results, start=1):
        source = result.metadata.get("originalName", "unknown")
        blocks.append(f"Context {number}:\n{result.content}\n(Source: {source})")
    return "\n\n".join(blocks)


def build_rag_system_prompt(results: Sequence[VectorSearchResult]) -> str:
    return RAG_SYSTEM_TEMPLATE.format(context=format_context(results))
