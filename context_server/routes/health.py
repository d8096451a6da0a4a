import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from ..config import Settings, get_settings

router = APIRouter()

logger = logging.getLogger("context_server.health")

HEALTH_RESPONSE = {"ok": True, "status": "ok"}


@router.get("/", tags=["Monitoring"], summary="Liveness text", include_in_schema=False)
async def root(settings: Settings = Depends(get_settings)):
    return PlainTextResponse(f"{settings.server_name} is running!")


@router.get(
    "/health",
    tags=["Monitoring"],
    summary="Health check endpoint",
    include_in_schema=False,
)
@router.get(
    "/healthz",
    tags=["Monitoring"],
    summary="Kubernetes style health check endpoint",
    include_in_schema=False,
)
async def health_check():
    logger.debug("Health probe received")
    return JSONResponse(content=HEALTH_RESPONSE, status_code=status.HTTP_200_OK)
