"""
Document API endpoints.

Routes:
- POST /documents/upload - Upload and process a document (multipart field "document")
- GET /documents - List uploaded documents
- GET /documents/stats - Vector store and storage statistics
- POST /documents/search - Similarity search over document chunks
- GET /documents/{id} - Document details with chunk count
- GET /documents/{id}/download - Original file
- DELETE /documents/{id} - Delete document, stored file and chunks

Dependencies: backend.application.services, backend.models
System role: Document HTTP API
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from backend.api.deps import get_document_service, get_settings_dependency
from backend.application.services.document_service import DocumentService
from backend.configs import Settings
from backend.core.exceptions import ValidationError
from backend.models.common import SuccessResponse
from backend.models.document import (
    DeletedDocumentResponse,
    DocumentDetailResponse,
    DocumentInfo,
    DocumentStatsResponse,
    SearchRequest,
    SearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post(
    "/upload",
    response_model=SuccessResponse[DocumentInfo],
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    document: UploadFile = File(..., description="File to upload"),
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DocumentInfo]:
    """
    Upload a document and index it for retrieval.

    Processing failures are reported in the returned entry
    (processed=false, processingError) rather than as an error response.

    Raises:
        ValidationError(400): Empty or oversized file
        UnsupportedMediaTypeError(415): Media type not accepted
    """
    content = await document.read()
    info = await document_service.upload_document(
        content=content,
        original_name=document.filename or "upload",
        media_type=document.content_type or "application/octet-stream",
    )
    return SuccessResponse(message="File uploaded successfully", data=info)


@router.get("", response_model=SuccessResponse[list[DocumentInfo]])
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[list[DocumentInfo]]:
    documents = await document_service.list_documents()
    return SuccessResponse(message="Documents retrieved successfully", data=documents)


@router.get("/stats", response_model=SuccessResponse[DocumentStatsResponse])
async def get_document_stats(
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DocumentStatsResponse]:
    stats = await document_service.get_overview_stats()
    return SuccessResponse(message="Document statistics retrieved successfully", data=stats)


@router.post("/search", response_model=SuccessResponse[SearchResponse])
async def search_documents(
    request: SearchRequest,
    document_service: DocumentService = Depends(get_document_service),
    settings: Settings = Depends(get_settings_dependency),
) -> SuccessResponse[SearchResponse]:
    """Similarity search over stored chunks."""
    limit = settings.api.max_query_length
    if len(request.query) > limit:
        raise ValidationError(f"Query exceeds {limit} characters", field="query")

    results = await document_service.search_similar_documents(
        request.query, k=request.k, threshold=request.threshold
    )
    return SuccessResponse(
        message="Search completed successfully",
        data=SearchResponse(query=request.query, results=results, total=len(results)),
    )


@router.get("/{document_id}", response_model=SuccessResponse[DocumentDetailResponse])
async def get_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DocumentDetailResponse]:
    document = await document_service.get_document(document_id)
    return SuccessResponse(message="Document retrieved successfully", data=document)


@router.get("/{document_id}/download")
async def download_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> Response:
    """Return the original uploaded bytes as an attachment."""
    info, content = await document_service.download_document(document_id)
    return Response(
        content=content,
        media_type=info.media_type,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(info.original_name)}",
        },
    )


@router.delete("/{document_id}", response_model=SuccessResponse[DeletedDocumentResponse])
async def delete_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DeletedDocumentResponse]:
    """
    Delete a document.

    Raises:
        DocumentNotFoundError(404): Unknown document ID
    """
    deleted = await document_service.delete_document(document_id)
    return SuccessResponse(message="Document deleted successfully", data=deleted)
