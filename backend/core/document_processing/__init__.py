"""
Document processing pipeline for ingestion.

Extracts text from uploaded bytes, splits it into overlapping chunks and
hands the chunk records to the vector store coordinator.

Dependencies: pypdf, langchain_text_splitters, langchain_google_genai, pydantic
System role: Document ingestion pipeline entrypoint
"""

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .entrypoint import DocumentPipeline
from .models import ChunkRecord, PipelineResult

__all__ = [
    "DocumentPipeline",
    "DocumentPipelineSettings",
    "get_pipeline_settings",
    "ChunkRecord",
    "PipelineResult",
]
