from __future__ import annotations

from typing import List

from fastapi import APIRouter, Body, Depends, Response

from app.deps import get_forex_db
from app.models import ForexPair
from app.record_store import ForexDatabase

router = APIRouter(prefix="/forex_pairs", tags=["forex"])


@router.post("")
def create_forex_pair(payload: ForexPair = Body(...), db: ForexDatabase = Depends(get_forex_db)) -> Response:
    with db.transaction():
        db.forex_pairs.upsert(payload)
    return Response(status_code=200)


@router.get("", response_model=List[ForexPair])
def list_forex_pairs(db: ForexDatabase = Depends(get_forex_db)) -> List[ForexPair]:
    with db.transaction():
        return db.forex_pairs.get_all()


@router.put("")
def update_forex_pair(payload: ForexPair = Body(...), db: ForexDatabase = Depends(get_forex_db)) -> Response:
    with db.transaction():
        db.forex_pairs.upsert(payload)
    return Response(status_code=200)


@router.get("/{pair_id}", response_model=ForexPair)
def read_forex_pair(pair_id: int, db: ForexDatabase = Depends(get_forex_db)):
    with db.transaction():
        pair = db.forex_pairs.get(pair_id)
    if pair is None:
        return Response(status_code=404)
    return pair
