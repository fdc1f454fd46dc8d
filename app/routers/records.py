from __future__ import annotations

from typing import List

from fastapi import APIRouter, Body, Depends, Response

from app.deps import get_assignment_db
from app.models import Assignment
from app.record_store import AssignmentDatabase

router = APIRouter(prefix="/records", tags=["records"])

# Handlers are sync on purpose: FastAPI runs them in its thread pool, and the
# database lock is a threading.Lock held across the snapshot write.


@router.post("")
def create_record(
    payload: Assignment = Body(...),
    db: AssignmentDatabase = Depends(get_assignment_db),
) -> Response:
    # No existence check: POST and PUT are the same upsert.
    with db.transaction(persist=True):
        db.assignments.upsert(payload)
    return Response(status_code=200)


@router.get("", response_model=List[Assignment])
def list_records(db: AssignmentDatabase = Depends(get_assignment_db)) -> List[Assignment]:
    with db.transaction():
        return db.assignments.get_all()


@router.put("")
def update_record(
    payload: Assignment = Body(...),
    db: AssignmentDatabase = Depends(get_assignment_db),
) -> Response:
    with db.transaction(persist=True):
        db.assignments.upsert(payload)
    return Response(status_code=200)


@router.get("/{record_id}", response_model=Assignment)
def read_record(record_id: int, db: AssignmentDatabase = Depends(get_assignment_db)):
    with db.transaction():
        record = db.assignments.get(record_id)
    if record is None:
        return Response(status_code=404)
    return record


@router.delete("/{record_id}")
def delete_record(record_id: int, db: AssignmentDatabase = Depends(get_assignment_db)) -> Response:
    with db.transaction(persist=True):
        db.assignments.delete(record_id)
    return Response(status_code=200)
