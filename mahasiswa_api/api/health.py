from __future__ import annotations

from fastapi import APIRouter

from mahasiswa_api.models.schemas import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="OK", message="Backend is running")
