"""
Pipeline result model for document processing.

Represents the outcome of processing a document through the pipeline.

Dependencies: pydantic
System role: Return type for DocumentPipeline.process()
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PipelineResult(BaseModel):
    """Result of document processing pipeline execution."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    document_id: str = Field(description="Unique document identifier")
    chunks_created: int = Field(description="Number of chunk records stored")
    total_characters: int = Field(description="Length of the extracted text")
    processed_at: datetime = Field(description="Timestamp stamped on every chunk of this run")
