"""
Models for document processing pipeline.

Exports: ChunkRecord, PipelineResult
"""

from .chunk import ChunkRecord
from .pipeline_result import PipelineResult

__all__ = [
    "ChunkRecord",
    "PipelineResult",
]
