from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.logging_config import configure_logging
from app.persistence import JsonSnapshotPersistence
from app.record_store import ForexDatabase
from app.routers.auth import router as auth_router
from app.routers.forex import router as forex_router
from app.routers.records import router as records_router
from app.settings import Settings, get_settings

logger = logging.getLogger("assignment_tracker")

APP_VERSION = "1.0.0"


def create_app(
    settings: Optional[Settings] = None,
    persistence: Optional[JsonSnapshotPersistence] = None,
) -> FastAPI:
    """Build the API and load its state.

    The assignment database is read from the snapshot once, here, before any
    request can be served. The forex board always starts empty.
    """
    s = settings or get_settings()
    configure_logging(s.log_level)

    persistence = persistence or JsonSnapshotPersistence(s.database_path)

    app = FastAPI(title="Assignment Tracker", version=APP_VERSION)
    app.state.settings = s
    app.state.assignment_db = persistence.load_or_empty()
    app.state.forex_db = ForexDatabase()

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=s.cors_allow_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Accept", "Content-Type"],
        max_age=s.cors_max_age,
    )

    app.include_router(records_router)
    app.include_router(auth_router)
    app.include_router(forex_router)

    @app.get("/healthz")
    def healthz():
        return JSONResponse({"ok": True, "service": "assignment-tracker", "version": APP_VERSION})

    logger.info("Ready (snapshot=%s)", persistence.path)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    s = get_settings()
    uvicorn.run("app.main:app", host=s.host, port=s.port)
