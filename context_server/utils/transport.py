"""
Transport negotiation shared by the discovery and dispatch endpoints.

A request is answered either with a plain JSON body or with a single
Server-Sent-Events frame, depending on whether the client lists
``text/event-stream`` in its ``Accept`` header. The choice is made once per
request and applies to success and error payloads alike; ``respond`` is the
only place either envelope is built.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, AsyncIterator, Dict, List

from fastapi import Request, status
from fastapi.responses import Response, StreamingResponse

EVENT_STREAM = "text/event-stream"

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class Transport(str, Enum):
    JSON = "json"
    SSE = "sse"


def _media_ranges(accept_header: str) -> List[str]:
    ranges = []
    for part in accept_header.split(","):
        media_type = part.split(";", 1)[0].strip().lower()
        if media_type:
            ranges.append(media_type)
    return ranges


def negotiate_transport(request: Request) -> Transport:
    accept_header = request.headers.get("Accept", "")
    if EVENT_STREAM in _media_ranges(accept_header):
        return Transport.SSE
    return Transport.JSON


def encode_json(value: Any) -> str:
    """Compact JSON, identical for response bodies, SSE frames and context content."""
    return json.dumps(value, ensure_ascii=False, allow_nan=False, separators=(",", ":"))


def sse_frame(payload: Dict[str, Any]) -> str:
    return f"data: {encode_json(payload)}\n\n"


async def _single_frame(payload: Dict[str, Any]) -> AsyncIterator[str]:
    yield sse_frame(payload)


def respond(
    payload: Dict[str, Any],
    transport: Transport,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    if transport is Transport.SSE:
        return StreamingResponse(
            _single_frame(payload),
            status_code=status_code,
            media_type=EVENT_STREAM,
            headers=SSE_HEADERS,
        )
    return Response(
        content=encode_json(payload),
        status_code=status_code,
        media_type="application/json",
    )
