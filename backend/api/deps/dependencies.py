"""
Dependency injection container.

AppContext holds every long-lived collaborator (coordinator, registry,
services). It is built once in the application lifespan, stored on
`app.state.context`, and handed to route handlers through Depends.

Dependencies: backend.configs, backend.application, backend.boundary, backend.core
System role: DI container for service injection
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from backend.application.services import ChatService, DocumentService
from backend.boundary.aws.s3_client import S3BlobStore
from backend.boundary.vdb.vector_store_coordinator import VectorStoreCoordinator
from backend.boundary.vdb.vector_store_factory import create_coordinator
from backend.configs import Settings
from backend.core.document_processing import DocumentPipeline
from backend.core.document_processing.embeddings_wrapper import create_embeddings
from backend.core.document_processing.tasks import EmbeddingTask
from backend.core.document_tracker import DocumentLifecycleTracker
from backend.core.rag_query import LLMClient, create_chat_model

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Process-wide collaborators shared by all requests."""

    settings: Settings
    coordinator: VectorStoreCoordinator
    tracker: DocumentLifecycleTracker
    document_service: DocumentService
    chat_service: ChatService
    blob_store: S3BlobStore | None = None

    def startup(self) -> None:
        """Select the vector backend (pgvector or in-memory fallback)."""
        self.coordinator.initialize()

    def shutdown(self) -> None:
        self.coordinator.close()


def build_app_context(
    settings: Settings,
    embeddings: Embeddings | None = None,
    chat_model: BaseChatModel | None = None,
    blob_store: S3BlobStore | None = None,
) -> AppContext:
    """
    Wire the application from settings.

    Args:
        settings: Application settings
        embeddings: Embeddings provider (Google Generative AI if None)
        chat_model: Chat model (Gemini if None)
        blob_store: Blob store (S3 when BLOB_STORAGE_BUCKET is set, else none)

    Returns:
        AppContext: Context whose coordinator is not initialized yet
    """
    vector_config = settings.vector_store
    embedding_task = EmbeddingTask(
        embeddings or create_embeddings(vector_config.embedding_model, vector_config.dimensions),
        dimensions=vector_config.dimensions,
    )
    coordinator = create_coordinator(settings, embedding_task)
    tracker = DocumentLifecycleTracker(coordinator)

    if blob_store is None and settings.blob_storage.enabled:
        blob_store = S3BlobStore(
            bucket=settings.blob_storage.bucket,
            region=settings.blob_storage.region,
            key_prefix=settings.blob_storage.key_prefix,
        )

    document_service = DocumentService(
        pipeline=DocumentPipeline(coordinator, settings.pipeline),
        coordinator=coordinator,
        tracker=tracker,
        settings=settings.pipeline,
        blob_store=blob_store,
        search_top_k=vector_config.default_top_k,
        search_score_threshold=vector_config.default_score_threshold,
    )
    chat_service = ChatService(
        coordinator=coordinator,
        llm_client=LLMClient(chat_model or create_chat_model(settings.llm)),
        rag_top_k=vector_config.rag_top_k,
        rag_score_threshold=vector_config.rag_score_threshold,
        system_prompt=settings.llm.system_prompt,
    )

    return AppContext(
        settings=settings,
        coordinator=coordinator,
        tracker=tracker,
        document_service=document_service,
        chat_service=chat_service,
        blob_store=blob_store,
    )


def get_app_context(request: Request) -> AppContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Application context is not initialized")
    return context


def get_settings_dependency(context: AppContext = Depends(get_app_context)) -> Settings:
    return context.settings


def get_document_service(context: AppContext = Depends(get_app_context)) -> DocumentService:
    return context.document_service


def get_chat_service(context: AppContext = Depends(get_app_context)) -> ChatService:
    return context.chat_service


def get_coordinator(context: AppContext = Depends(get_app_context)) -> VectorStoreCoordinator:
    return context.coordinator
