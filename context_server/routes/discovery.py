from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from ..config import Settings, get_settings
from ..services.metadata import describe
from ..utils.transport import negotiate_transport, respond

router = APIRouter()

logger = logging.getLogger("context_server.discovery")

WELL_KNOWN_PATH = "/.well-known/model-context-protocol.json"


@router.get(WELL_KNOWN_PATH, tags=["Discovery"], summary="Server metadata and context catalog")
async def server_metadata(request: Request, settings: Settings = Depends(get_settings)) -> Response:
    """
    Discovery document.

    Lists every context this server provides together with its parameter
    schema. Answered as JSON, or as one SSE data frame when the client
    accepts text/event-stream.
    """
    transport = negotiate_transport(request)
    metadata = describe(request.headers.get("host"), request.url.scheme, settings)
    logger.info(f"DISCOVERY | root_url: {metadata.root_url} | transport: {transport.value}")
    return respond(metadata.to_wire(), transport)
