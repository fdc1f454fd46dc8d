from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import PlainTextResponse

from app.deps import get_assignment_db
from app.models import LoginRequest, User
from app.record_store import AssignmentDatabase

router = APIRouter(tags=["auth"])

LOGIN_OK_MESSAGE = "Logged in!"
LOGIN_REJECTED_MESSAGE = "Invalid username or password"


@router.post("/register")
def register(payload: User = Body(...), db: AssignmentDatabase = Depends(get_assignment_db)) -> Response:
    """Store a user as-is.

    Usernames are not checked for uniqueness and the password is kept in plain
    text. This is NOT suitable for real production auth.
    """
    with db.transaction(persist=True):
        db.users.upsert(payload)
    return Response(status_code=200)


@router.post("/login", response_class=PlainTextResponse)
def login(payload: LoginRequest = Body(...), db: AssignmentDatabase = Depends(get_assignment_db)) -> PlainTextResponse:
    with db.transaction():
        user = db.users.authenticate(payload.username, payload.password)
    if user is None:
        return PlainTextResponse(LOGIN_REJECTED_MESSAGE, status_code=400)
    return PlainTextResponse(LOGIN_OK_MESSAGE)
