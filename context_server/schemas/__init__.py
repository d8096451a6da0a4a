"""Pydantic schema exports."""

from .contexts import (
    ContextDescriptor,
    ContextKind,
    ContextPayload,
    ContextRequest,
    ContextResponse,
    ErrorEnvelope,
    ServerMetadata,
)

__all__ = [
    "ContextDescriptor",
    "ContextKind",
    "ContextPayload",
    "ContextRequest",
    "ContextResponse",
    "ErrorEnvelope",
    "ServerMetadata",
]
