from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContextKind(str, Enum):
    """Every context the server can resolve. One member per catalog entry."""

    PROFILE = "profile"
    BLOG_POSTS_LIST = "blog_posts_list"
    BLOG_POST_CONTENT = "blog_post_content"


class ContextDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: ContextKind
    name: str
    description: str
    endpoint: str = Field(default="/mcp", alias="mcp_endpoint")
    params_schema: Optional[Dict[str, Any]] = None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ServerMetadata(BaseModel):
    name: str
    description: str
    root_url: str
    icon_url: str
    contexts: List[ContextDescriptor]

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ContextRequest(BaseModel):
    context_id: Optional[str] = None
    params: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_body(cls, body: Any) -> "ContextRequest":
        """Build a request from a decoded JSON body without rejecting odd shapes.

        Anything that is not an object yields a request without a context id,
        falsy ids count as absent and non-mapping params are dropped.
        """
        if not isinstance(body, dict):
            return cls()

        context_id = body.get("context_id")
        params = body.get("params")
        return cls(
            context_id=str(context_id) if context_id else None,
            params=params if isinstance(params, dict) else {},
        )


class ContextPayload(BaseModel):
    content: str
    format: str


class ContextResponse(BaseModel):
    context: ContextPayload


class ErrorEnvelope(BaseModel):
    error: str
