from __future__ import annotations

from typing import Dict, Tuple

from ..schemas.contexts import ContextDescriptor, ContextKind

CONTEXT_ENDPOINT = "/mcp"

POST_ID_SCHEMA = {
    "type": "object",
    "properties": {
        "post_id": {
            "type": "string",
            "description": "ID of the blog post to fetch",
        },
    },
    "required": ["post_id"],
}

CONTEXT_CATALOG: Tuple[ContextDescriptor, ...] = (
    ContextDescriptor(
        id=ContextKind.PROFILE,
        name="Profile",
        description="Basic profile of the site owner",
        endpoint=CONTEXT_ENDPOINT,
    ),
    ContextDescriptor(
        id=ContextKind.BLOG_POSTS_LIST,
        name="Blog post list",
        description="Titles and summaries of published blog posts",
        endpoint=CONTEXT_ENDPOINT,
    ),
    ContextDescriptor(
        id=ContextKind.BLOG_POST_CONTENT,
        name="Blog post content",
        description="Body of the blog post with the given ID (Markdown)",
        endpoint=CONTEXT_ENDPOINT,
        params_schema=POST_ID_SCHEMA,
    ),
)

_BY_ID: Dict[str, ContextDescriptor] = {descriptor.id.value: descriptor for descriptor in CONTEXT_CATALOG}

if len(_BY_ID) != len(CONTEXT_CATALOG) or set(_BY_ID) != {kind.value for kind in ContextKind}:
    raise RuntimeError("Context catalog must list every ContextKind exactly once")


def resolve_kind(context_id: str) -> ContextKind | None:
    descriptor = _BY_ID.get(context_id)
    return descriptor.id if descriptor else None
