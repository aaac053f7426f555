from __future__ import annotations

import logging

from fastapi import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from timebill.db import get_engine
from timebill.exceptions import Unauthenticated
from timebill.repositories.sqlalchemy import (
    SQLAlchemyDownloadRepository,
    SQLAlchemyTimeEntryRepository,
    SQLAlchemyUserRepository,
)
from timebill.services.document_service import DocumentService
from timebill.services.download_service import DownloadService
from timebill.services.time_entry_service import TimeEntryService
from timebill.services.user_service import UserService

logger = logging.getLogger(__name__)


class DBConnectionMiddleware:
    """Pure ASGI middleware, one DB connection per request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request.state.db_conn = None
        try:
            await self.app(scope, receive, send)
        finally:
            conn = getattr(request.state, "db_conn", None)
            if conn is not None:
                conn.close()
                logger.debug("DB connection closed for %s %s", request.method, request.url.path)


def _get_conn(request: Request):
    """Lazy per-request connection, closed by the middleware."""
    if getattr(request.state, "db_conn", None) is None:
        logger.debug("Creating DB connection for %s %s", request.method, request.url.path)
        request.state.db_conn = get_engine().connect()
    return request.state.db_conn


def get_current_user_id(request: Request) -> int:
    user_id = request.session.get("user_id")
    if not user_id:
        raise Unauthenticated()
    return int(user_id)


def get_user_service(request: Request) -> UserService:
    return UserService(SQLAlchemyUserRepository(_get_conn(request)))


def get_time_entry_service(request: Request) -> TimeEntryService:
    return TimeEntryService(SQLAlchemyTimeEntryRepository(_get_conn(request)))


def get_download_service(request: Request) -> DownloadService:
    return DownloadService(SQLAlchemyDownloadRepository(_get_conn(request)))


def get_document_service(request: Request) -> DocumentService:
    conn = _get_conn(request)
    return DocumentService(
        SQLAlchemyTimeEntryRepository(conn),
        DownloadService(SQLAlchemyDownloadRepository(conn)),
    )
