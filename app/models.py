from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Assignment(BaseModel):
    id: int = Field(..., ge=0, description="Unique key within the assignment collection")
    name: str
    complete: bool


class User(BaseModel):
    """Registered user.

    The password is stored and compared as plain text. This is a functional
    equality check for the demo login flow, NOT a security mechanism.
    """

    id: int = Field(..., ge=0)
    username: str
    password: str


class LoginRequest(BaseModel):
    # Clients usually send the same shape as /register; the id is ignored.
    id: Optional[int] = None
    username: str
    password: str


class ForexPair(BaseModel):
    id: int = Field(..., ge=0)
    pair: str = Field(..., description="Currency pair, e.g. EUR/USD")
    price: float


class AssignmentSnapshot(BaseModel):
    """On-disk form of the assignment tracker state.

    JSON object keys are the stringified ids; pydantic converts them back to ints.
    """

    assignments: dict[int, Assignment] = Field(default_factory=dict)
    users: dict[int, User] = Field(default_factory=dict)
