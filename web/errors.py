"""Request-boundary error translation.

Domain errors become ``{"error": message}`` JSON with their own status;
request validation failures become 400; anything unexpected is logged with
its traceback and returned as a 500.
"""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from timebill.exceptions import TimebillError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg", "invalid")))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TimebillError)
    async def timebill_error_handler(request: Request, exc: TimebillError):
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        else:
            logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.warning("Invalid request on %s %s: %s", request.method, request.url.path, message)
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))


class UnhandledErrorMiddleware:
    """Pure ASGI middleware turning uncaught exceptions into JSON 500s.

    Sits inside the CORS middleware so error responses still carry the
    CORS headers.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, tracking_send)
        except Exception as exc:
            if response_started:
                raise
            logger.error(
                "Unhandled exception on %s %s:\n%s",
                scope["method"],
                scope["path"],
                traceback.format_exc(),
            )
            response = error_response(500, str(exc) or type(exc).__name__)
            await response(scope, receive, send)
