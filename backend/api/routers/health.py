"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: backend.boundary.vdb
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from backend.api.deps import get_coordinator
from backend.boundary.vdb.vector_schemas import BackendHealth
from backend.boundary.vdb.vector_store_coordinator import VectorStoreCoordinator
from backend.models.common import SuccessResponse


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=SuccessResponse[HealthResponse])
async def health_check() -> SuccessResponse[HealthResponse]:
    """Basic health check."""
    return SuccessResponse(
        message="Server is running",
        data=HealthResponse(status="healthy", message="Server Healthy"),
    )


@router.get("/vector-store", response_model=SuccessResponse[BackendHealth])
async def health_check_vector_store(
    coordinator: VectorStoreCoordinator = Depends(get_coordinator),
) -> SuccessResponse[BackendHealth]:
    """Active vector backend, fallback flag and liveness."""
    health = await run_in_threadpool(coordinator.health)
    return SuccessResponse(message="Vector store status retrieved", data=health)
