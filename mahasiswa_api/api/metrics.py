from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from mahasiswa_api.config import get_settings
from mahasiswa_api.observability.metrics import get_metrics


router = APIRouter(tags=["metrics"])


@router.get("/metrics", include_in_schema=False)
async def metrics(request: Request) -> Response:
    settings = get_settings()
    if not settings.enable_metrics_endpoint:
        raise HTTPException(status_code=404, detail="Not found")
    body, content_type = get_metrics().render(request.headers.get("accept"))
    return Response(content=body, headers={"Content-Type": content_type})
