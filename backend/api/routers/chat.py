"""Chat API endpoints.

Routes:
- POST /chat - Answer a message, with RAG when useRAG is true
- POST /chat/rag - Answer a message with RAG

Dependencies: backend.application.services.chat_service
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from backend.api.deps import get_chat_service, get_settings_dependency
from backend.application.services.chat_service import ChatService
from backend.configs import Settings
from backend.core.exceptions import ValidationError
from backend.models.chat import ChatRequest, ChatResponse
from backend.models.common import SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _check_length(request: ChatRequest, settings: Settings) -> None:
    limit = settings.api.max_message_length
    if len(request.message) > limit:
        raise ValidationError(f"Message exceeds {limit} characters", field="message")


@router.post("", response_model=SuccessResponse[ChatResponse])
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
    settings: Settings = Depends(get_settings_dependency),
) -> SuccessResponse[ChatResponse]:
    """Answer a chat message.

    Raises:
        ValidationError(400): Message too long
        ProviderError(502): LLM call failed
    """
    _check_length(request, settings)
    response = await chat_service.answer(
        request.message,
        session_id=request.session_id,
        use_rag=request.use_rag,
    )
    return SuccessResponse(message="Message processed successfully", data=response)


@router.post("/rag", response_model=SuccessResponse[ChatResponse])
async def chat_with_rag(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
    settings: Settings = Depends(get_settings_dependency),
) -> SuccessResponse[ChatResponse]:
    """Answer a chat message grounded in uploaded documents."""
    _check_length(request, settings)
    response = await chat_service.answer(
        request.message,
        session_id=request.session_id,
        use_rag=True,
    )
    return SuccessResponse(message="RAG message processed successfully", data=response)
