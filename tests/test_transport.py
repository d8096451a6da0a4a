import asyncio

import pytest
from starlette.requests import Request

from context_server.utils.transport import (
    SSE_HEADERS,
    Transport,
    encode_json,
    negotiate_transport,
    respond,
    sse_frame,
)


def _request(accept=None):
    headers = []
    if accept is not None:
        headers.append((b"accept", accept.encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


async def _collect(response):
    chunks = []
    async for chunk in response.body_iterator:
        chunks.append(chunk if isinstance(chunk, str) else chunk.decode())
    return "".join(chunks)


@pytest.mark.parametrize(
    "accept,expected",
    [
        (None, Transport.JSON),
        ("", Transport.JSON),
        ("application/json", Transport.JSON),
        ("*/*", Transport.JSON),
        ("text/event-stream", Transport.SSE),
        ("TEXT/EVENT-STREAM", Transport.SSE),
        ("application/json, text/event-stream", Transport.SSE),
        ("text/event-stream; q=0.5, application/json", Transport.SSE),
        ("text/event-streaming", Transport.JSON),
    ],
)
def test_negotiate_transport(accept, expected):
    assert negotiate_transport(_request(accept)) is expected


def test_encode_json_is_compact_and_keeps_unicode():
    assert encode_json({"a": [1, 2], "b": "日本"}) == '{"a":[1,2],"b":"日本"}'


def test_sse_frame():
    assert sse_frame({"error": "x"}) == 'data: {"error":"x"}\n\n'


def test_respond_json():
    response = respond({"ok": True}, Transport.JSON, status_code=404)

    assert response.status_code == 404
    assert response.media_type == "application/json"
    assert response.body == b'{"ok":true}'


def test_respond_sse_writes_one_frame():
    response = respond({"ok": True}, Transport.SSE, status_code=400)

    assert response.status_code == 400
    assert response.media_type == "text/event-stream"
    for name, value in SSE_HEADERS.items():
        assert response.headers[name] == value
    assert asyncio.run(_collect(response)) == 'data: {"ok":true}\n\n'


def test_json_body_equals_sse_frame_payload():
    payload = {"context": {"content": "# Title\n\nünïcode", "format": "text/markdown"}}
    body = respond(payload, Transport.JSON).body.decode()
    frame = asyncio.run(_collect(respond(payload, Transport.SSE)))

    assert frame == f"data: {body}\n\n"
