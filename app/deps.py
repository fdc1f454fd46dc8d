from __future__ import annotations

from fastapi import Request

from app.record_store import AssignmentDatabase, ForexDatabase

# Databases are created once by create_app() and live on app.state, so each
# app instance (and each TestClient) gets its own isolated state.


def get_assignment_db(request: Request) -> AssignmentDatabase:
    return request.app.state.assignment_db


def get_forex_db(request: Request) -> ForexDatabase:
    return request.app.state.forex_db
