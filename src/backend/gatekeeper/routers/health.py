"""Health check endpoints for Gatekeeper.

Both endpoints are unauthenticated and mounted at root (no /api/v1 prefix).
"""

import importlib.metadata

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from gatekeeper.auth.dependencies import get_http_client
from gatekeeper.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe: returns 200 if the application process is running."""
    version = importlib.metadata.version("gatekeeper")
    return {"status": "ok", "version": version}


@router.get("/health/ready")
async def health_ready(  # type: ignore[return]
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    """Readiness probe: 200 if the upstream console API answers successfully, 503 otherwise."""
    try:
        response = await http_client.get(
            settings.API_BASE_URL, timeout=settings.API_TIMEOUT_SECONDS
        )
        response.raise_for_status()
        return JSONResponse(status_code=200, content={"status": "ok"})
    except Exception as exc:  # noqa: BLE001
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "detail": str(exc)},
        )
