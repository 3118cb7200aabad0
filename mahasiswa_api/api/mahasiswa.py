from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mahasiswa_api.db.session import get_db
from mahasiswa_api.models.schemas import MahasiswaPayload, MahasiswaRecord, MessageResponse
from mahasiswa_api.services.mahasiswa_service import (
    DuplicateNimError,
    create_mahasiswa,
    delete_mahasiswa,
    get_mahasiswa,
    list_mahasiswa,
    update_mahasiswa,
)

router = APIRouter(prefix="/api/mahasiswa", tags=["mahasiswa"])

logger = logging.getLogger(__name__)

NOT_FOUND = "Mahasiswa not found"
FIELDS_REQUIRED = "All fields are required"
SERVER_ERROR = "Server error"


def _server_error(exc: SQLAlchemyError) -> HTTPException:
    # Full detail stays in the logs; callers only ever see the generic message.
    logger.exception("mahasiswa.store_error", extra={"error_type": type(exc).__name__})
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR)


def _require_fields(payload: MahasiswaPayload | None) -> MahasiswaPayload:
    # No body at all is treated like an empty object.
    payload = payload or MahasiswaPayload()
    missing = payload.missing_fields()
    if missing:
        logger.info("mahasiswa.validation_failed", extra={"missing": missing})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=FIELDS_REQUIRED)
    return payload


@router.get("", response_model=list[MahasiswaRecord])
def get_all(db: Session = Depends(get_db)) -> list[MahasiswaRecord]:
    try:
        return list_mahasiswa(db)
    except SQLAlchemyError as exc:
        raise _server_error(exc) from exc


@router.get("/{mahasiswa_id}", response_model=MahasiswaRecord)
def get_one(mahasiswa_id: int, db: Session = Depends(get_db)) -> MahasiswaRecord:
    try:
        record = get_mahasiswa(db, mahasiswa_id)
    except SQLAlchemyError as exc:
        raise _server_error(exc) from exc
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return record


@router.post("", response_model=MahasiswaRecord, status_code=status.HTTP_201_CREATED)
def create(
    payload: MahasiswaPayload | None = Body(default=None),
    db: Session = Depends(get_db),
) -> MahasiswaRecord:
    payload = _require_fields(payload)
    try:
        return create_mahasiswa(db, payload)
    except DuplicateNimError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        raise _server_error(exc) from exc


@router.put("/{mahasiswa_id}", response_model=MahasiswaRecord)
def update(
    mahasiswa_id: int,
    payload: MahasiswaPayload | None = Body(default=None),
    db: Session = Depends(get_db),
) -> MahasiswaRecord:
    payload = _require_fields(payload)
    try:
        record = update_mahasiswa(db, mahasiswa_id, payload)
    except DuplicateNimError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        raise _server_error(exc) from exc
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return record


@router.delete("/{mahasiswa_id}", response_model=MessageResponse)
def remove(mahasiswa_id: int, db: Session = Depends(get_db)) -> MessageResponse:
    try:
        deleted = delete_mahasiswa(db, mahasiswa_id)
    except SQLAlchemyError as exc:
        raise _server_error(exc) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return MessageResponse(message="Mahasiswa deleted successfully")
