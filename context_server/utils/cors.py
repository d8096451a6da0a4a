import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from .errors import INTERNAL_ERROR_MESSAGE

logger = logging.getLogger("context_server.errors")


class OpenCORSMiddleware(BaseHTTPMiddleware):
    """Adds fixed CORS headers to every response and answers every OPTIONS request.

    Starlette's CORSMiddleware only decorates requests that carry an Origin
    header; clients of this server expect the headers unconditionally.
    Exceptions that escape the app are turned into the generic 500 here, since
    Starlette's server-error handler sits outside this middleware.
    """

    def __init__(self, app: ASGIApp, *, allow_origin: str, allow_methods: str, allow_headers: str):
        super().__init__(app)
        self.headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Headers": allow_headers,
            "Access-Control-Allow-Methods": allow_methods,
        }

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self.headers)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"Unhandled exception on {request.method} {request.url.path}: {e}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"error": INTERNAL_ERROR_MESSAGE},
                headers=self.headers,
            )

        response.headers.update(self.headers)
        return response
