from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from fastapi import Depends, status
from fastapi.responses import Response

from ..config import Settings, get_settings
from ..schemas.contexts import ContextKind, ContextPayload, ContextRequest, ContextResponse
from ..utils.errors import (
    ContextError,
    ContextNotFound,
    MissingContextId,
    MissingParameter,
    internal_error,
)
from ..utils.transport import Transport, encode_json, respond
from .catalog import CONTEXT_CATALOG, resolve_kind
from .content_store import ContentStore, Found, get_content_store

mcp_logger = logging.getLogger("context_server.mcp")

JSON_FORMAT = "application/json"
MARKDOWN_FORMAT = "text/markdown"

T = TypeVar("T")


@dataclass
class DispatchOutcome:
    payload: Dict[str, Any]
    status_code: int
    transport: Transport

    def to_response(self) -> Response:
        return respond(self.payload, self.transport, self.status_code)


class ContextDispatcher:
    """Resolves a context request into a content payload or an error envelope."""

    def __init__(self, store: ContentStore, *, read_timeout: Optional[float] = None) -> None:
        self.store = store
        self.read_timeout = read_timeout

    async def read(self, awaitable: Awaitable[T]) -> T:
        if self.read_timeout:
            return await asyncio.wait_for(awaitable, timeout=self.read_timeout)
        return await awaitable

    async def resolve(self, request: ContextRequest) -> ContextResponse:
        if not request.context_id:
            raise MissingContextId()

        mcp_logger.info(f"MCP_REQUEST | context_id: {request.context_id} | params: {request.params!r}")

        kind = resolve_kind(request.context_id)
        if kind is None:
            mcp_logger.warning(f"Unknown context_id requested: {request.context_id}")
            raise ContextNotFound.for_context(request.context_id)

        handler = CONTEXT_HANDLERS[kind]
        return ContextResponse(context=await handler(self, request.params))

    async def dispatch(self, request: ContextRequest, transport: Transport) -> DispatchOutcome:
        try:
            response = await self.resolve(request)
        except ContextError as exc:
            return DispatchOutcome(exc.payload, exc.status_code, transport)
        except Exception as exc:
            error = internal_error(exc, context_id=request.context_id, params=request.params)
            return DispatchOutcome(error.payload, error.status_code, transport)

        mcp_logger.info(f"MCP_RESPONSE | context_id: {request.context_id} | transport: {transport.value}")
        return DispatchOutcome(response.model_dump(), status.HTTP_200_OK, transport)


async def handle_profile(dispatcher: ContextDispatcher, params: Dict[str, Any]) -> ContextPayload:
    profile = await dispatcher.read(dispatcher.store.read_profile())
    return ContextPayload(content=encode_json(profile), format=JSON_FORMAT)


async def handle_blog_posts_list(dispatcher: ContextDispatcher, params: Dict[str, Any]) -> ContextPayload:
    posts = await dispatcher.read(dispatcher.store.read_post_summaries())
    return ContextPayload(content=encode_json(posts), format=JSON_FORMAT)


async def handle_blog_post_content(dispatcher: ContextDispatcher, params: Dict[str, Any]) -> ContextPayload:
    post_id = params.get("post_id")
    if not isinstance(post_id, str) or not post_id:
        raise MissingParameter("post_id", ContextKind.BLOG_POST_CONTENT.value)

    lookup = await dispatcher.read(dispatcher.store.read_post_body(post_id))
    # An empty body counts as absent.
    if not isinstance(lookup, Found) or not lookup.value:
        mcp_logger.warning(f"Blog post not found for id: {post_id}")
        raise ContextNotFound.for_post(post_id)

    return ContextPayload(content=lookup.value, format=MARKDOWN_FORMAT)


Handler = Callable[[ContextDispatcher, Dict[str, Any]], Awaitable[ContextPayload]]

CONTEXT_HANDLERS: Dict[ContextKind, Handler] = {
    ContextKind.PROFILE: handle_profile,
    ContextKind.BLOG_POSTS_LIST: handle_blog_posts_list,
    ContextKind.BLOG_POST_CONTENT: handle_blog_post_content,
}

if set(CONTEXT_HANDLERS) != {descriptor.id for descriptor in CONTEXT_CATALOG}:
    raise RuntimeError("CONTEXT_HANDLERS and CONTEXT_CATALOG are out of sync")

mcp_logger.debug(f"Context handlers registered: {len(CONTEXT_HANDLERS)}")


def get_dispatcher(
    store: ContentStore = Depends(get_content_store),
    settings: Settings = Depends(get_settings),
) -> ContextDispatcher:
    return ContextDispatcher(store, read_timeout=settings.content_read_timeout)
