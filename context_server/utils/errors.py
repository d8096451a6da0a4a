from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, status

logger = logging.getLogger("context_server.errors")

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ContextError(HTTPException):
    """Base for every error the context endpoints report to clients.

    The detail is already shaped as the wire envelope so the app-level
    HTTPException handler can return it unchanged.
    """

    def __init__(self, message: str, *, status_code: int = status.HTTP_400_BAD_REQUEST) -> None:
        super().__init__(status_code=status_code, detail={"error": message})
        self.message = message

    @property
    def payload(self) -> Dict[str, str]:
        return {"error": self.message}


class MissingContextId(ContextError):
    def __init__(self) -> None:
        super().__init__("context_id is required")


class MissingParameter(ContextError):
    def __init__(self, param_name: str, context_id: str) -> None:
        super().__init__(f"Missing required parameter '{param_name}' for context '{context_id}'")
        self.param_name = param_name
        self.context_id = context_id


class ContextNotFound(ContextError):
    def __init__(self, message: str, *, key: str) -> None:
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)
        self.key = key

    @classmethod
    def for_context(cls, context_id: str) -> "ContextNotFound":
        return cls(f"Context with id '{context_id}' not found", key=context_id)

    @classmethod
    def for_post(cls, post_id: str) -> "ContextNotFound":
        return cls(f"Blog post with id '{post_id}' not found", key=post_id)


class InternalError(ContextError):
    """Generic 500. The cause stays server-side."""

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        super().__init__(INTERNAL_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.cause = cause


def internal_error(
    cause: BaseException,
    *,
    context_id: Optional[str] = None,
    params: Optional[Dict[str, Any]] = None,
) -> InternalError:
    """Log an unexpected failure with its request details and wrap it.

    Use this at the single top-level catch of a request: the full cause goes
    to the log, the client only ever sees the generic message.
    """
    logger.error(
        f"[internal_error] context_id={context_id!r} params={params!r}: {cause!r}",
        exc_info=(type(cause), cause, cause.__traceback__),
    )
    return InternalError(cause)
