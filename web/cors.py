"""Permissive CORS for the browser client.

Every response carries the same CORS headers and every OPTIONS request is
answered directly with an empty 200, on all paths alike.
"""

from __future__ import annotations

import logging

from starlette.datastructures import MutableHeaders
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from timebill.settings import settings

logger = logging.getLogger(__name__)

ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
EXPOSE_HEADERS = "content-disposition"


def cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }


class CORSMiddleware:
    """Pure ASGI middleware adding CORS headers and answering pre-flights."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = cors_headers()

        if scope["method"] == "OPTIONS":
            logger.debug("Pre-flight %s", scope["path"])
            response = Response(status_code=200, headers=headers)
            await response(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = MutableHeaders(scope=message)
                for name, value in headers.items():
                    response_headers[name] = value
            await send(message)

        await self.app(scope, receive, send_with_cors)
