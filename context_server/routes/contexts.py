from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response

from ..schemas.contexts import ContextRequest
from ..services.dispatcher import ContextDispatcher, get_dispatcher
from ..utils.transport import negotiate_transport

router = APIRouter()

logger = logging.getLogger("context_server.mcp")


async def _read_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as e:
        logger.warning(f"Unparseable request body on {request.url.path}: {e}")
        return None


@router.options("/mcp", include_in_schema=False)
async def context_preflight() -> Response:
    return Response(status_code=status.HTTP_200_OK)


@router.post("/mcp", tags=["MCP"], summary="Fetch a context by id")
async def fetch_context(
    request: Request,
    dispatcher: ContextDispatcher = Depends(get_dispatcher),
) -> Response:
    """
    Resolve one context.

    Body: ``{"context_id": "...", "params": {...}}``. Returns
    ``{"context": {"content": ..., "format": ...}}`` or ``{"error": ...}``
    with status 400/404/500, as JSON or as a single SSE data frame
    depending on the Accept header.
    """
    transport = negotiate_transport(request)
    context_request = ContextRequest.from_body(await _read_body(request))
    outcome = await dispatcher.dispatch(context_request, transport)
    return outcome.to_response()
