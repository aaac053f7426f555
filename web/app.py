from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from timebill.db import initialize_db
from timebill.logging import configure_logging, reconfigure
from timebill.settings import settings
from web.auth import router as auth_router
from web.cors import CORSMiddleware
from web.deps import DBConnectionMiddleware
from web.errors import UnhandledErrorMiddleware, register_error_handlers
from web.routes.time_tracking import router as time_tracking_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    initialize_db()
    # Alembic's fileConfig may have overridden the logging config
    reconfigure()
    logger.info("Application started")
    yield


app = FastAPI(title="timebill", docs_url=None, redoc_url=None, lifespan=lifespan)

register_error_handlers(app)

# Last added runs first: CORS -> session -> error catch-all -> DB connection.
app.add_middleware(DBConnectionMiddleware)
app.add_middleware(UnhandledErrorMiddleware)
app.add_middleware(SessionMiddleware, secret_key=settings.get_secret_key())
app.add_middleware(CORSMiddleware)

app.include_router(auth_router)
app.include_router(time_tracking_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
