"""
Chat service for conversational Q&A with optional RAG.

Answers a user message with the LLM, optionally grounding the answer in
chunks retrieved from the vector store. Retrieval problems never fail the
request: the answer degrades to a plain LLM reply.

Dependencies: backend.boundary.vdb, backend.core.rag_query
System role: RAG orchestration layer
"""

import logging
import uuid

from fastapi.concurrency import run_in_threadpool

from backend.boundary.vdb.vector_schemas import VectorSearchResult
from backend.boundary.vdb.vector_store_coordinator import VectorStoreCoordinator
from backend.core.rag_query import GENERIC_SYSTEM_PROMPT, LLMClient, build_rag_system_prompt
from backend.models.chat import ChatResponse, ContextUsage

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return f"session_{uuid.uuid4().hex}"


class ChatService:
    """
    Chat service for single-turn answers.

    Coordinates retrieval through the vector store coordinator, prompt
    assembly and the LLM call.
    """

    def __init__(
        self,
        coordinator: VectorStoreCoordinator,
        llm_client: LLMClient,
        rag_top_k: int = 3,
        rag_score_threshold: float = 0.6,
        system_prompt: str = GENERIC_SYSTEM_PROMPT,
    ) -> None:
        """
        Initialize chat service.

        Args:
            coordinator: Vector store coordinator used for retrieval
            llm_client: LLM completion client
            rag_top_k: Chunks retrieved per RAG answer
            rag_score_threshold: Minimum similarity for retrieved chunks
            system_prompt: Prompt used when no context is injected
        """
        self.coordinator = coordinator
        self.llm_client = llm_client
        self.rag_top_k = rag_top_k
        self.rag_score_threshold = rag_score_threshold
        self.system_prompt = system_prompt

    async def answer(
        self,
        message: str,
        session_id: str | None = None,
        use_rag: bool = False,
    ) -> ChatResponse:
        """
        Answer a user message.

        Flow:
        1. Retrieve top-k chunks above the threshold (only when use_rag)
        2. Build a context prompt, or the generic prompt when nothing was retrieved
        3. Call the LLM and wrap the reply

        Args:
            message: User's message
            session_id: Session ID (generated if None)
            use_rag: Retrieve document context before answering

        Returns:
            ChatResponse: Reply with session ID, timestamp and context usage

        Raises:
            ProviderError: The LLM call failed
        """
        session_id = session_id or new_session_id()
        results = await self._retrieve(message) if use_rag else []

        if results:
            system_prompt = build_rag_system_prompt(results)
            context_used = ContextUsage(
                chunks=len(results),
                sources=sorted({r.metadata.get("originalName", "unknown") for r in results}),
            )
        else:
            system_prompt = self.system_prompt
            context_used = None

        reply = await run_in_threadpool(self.llm_client.complete, system_prompt, message)

        logger.info(
            f"{__name__}:answer - Answered message",
            extra={
                "session_id": session_id,
                "rag_requested": use_rag,
                "context_chunks": len(results),
            },
        )
        return ChatResponse(
            session_id=session_id,
            user_message=message,
            ai_response=reply,
            rag_enabled=bool(results),
            context_used=context_used,
        )

    async def _retrieve(self, message: str) -> list[VectorSearchResult]:
        try:
            return await run_in_threadpool(
                self.coordinator.search_by_text,
                message,
                self.rag_top_k,
                self.rag_score_threshold,
            )
        except Exception as e:
            logger.warning(
                f"{__name__}:_retrieve - Retrieval failed, answering without context: {e}",
                extra={"error_type": type(e).__name__},
            )
            return []
