from __future__ import annotations

import logging

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mahasiswa_api.db.models import Mahasiswa
from mahasiswa_api.models.schemas import MahasiswaPayload, MahasiswaRecord
from mahasiswa_api.observability.metrics import get_metrics

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation.
_UNIQUE_VIOLATION = "23505"

_COLUMNS = tuple(Mahasiswa.__table__.c)


class DuplicateNimError(Exception):
    """Raised when an insert or update collides with an existing NIM."""


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    # psycopg3 exposes `sqlstate`, psycopg2 `pgcode`.
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == _UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(orig)


def _values(payload: MahasiswaPayload) -> dict[str, str | None]:
    return {
        "nim": payload.nim,
        "nama": payload.nama,
        "jurusan": payload.jurusan,
        "angkatan": payload.angkatan,
    }


def _write(db: Session, stmt) -> RowMapping | None:
    """Execute a single-statement write with RETURNING and commit it."""

    try:
        row = db.execute(stmt).mappings().one_or_none()
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_unique_violation(exc):
            raise DuplicateNimError("NIM already exists") from exc
        raise
    except Exception:
        db.rollback()
        raise
    return row


def list_mahasiswa(db: Session) -> list[MahasiswaRecord]:
    get_metrics().observe_db_query("select_all")
    rows = db.execute(select(*_COLUMNS).order_by(Mahasiswa.id.asc())).mappings().all()
    return [MahasiswaRecord.model_validate(dict(row)) for row in rows]


def get_mahasiswa(db: Session, mahasiswa_id: int) -> MahasiswaRecord | None:
    get_metrics().observe_db_query("select_one")
    row = db.execute(select(*_COLUMNS).where(Mahasiswa.id == mahasiswa_id)).mappings().one_or_none()
    if row is None:
        return None
    return MahasiswaRecord.model_validate(dict(row))


def create_mahasiswa(db: Session, payload: MahasiswaPayload) -> MahasiswaRecord:
    get_metrics().observe_db_query("insert")
    row = _write(db, insert(Mahasiswa).values(**_values(payload)).returning(*_COLUMNS))
    if row is None:
        raise RuntimeError("INSERT ... RETURNING produced no row")

    logger.info("mahasiswa.created", extra={"mahasiswa_id": row["id"]})
    return MahasiswaRecord.model_validate(dict(row))


def update_mahasiswa(db: Session, mahasiswa_id: int, payload: MahasiswaPayload) -> MahasiswaRecord | None:
    get_metrics().observe_db_query("update")
    stmt = (
        update(Mahasiswa)
        .where(Mahasiswa.id == mahasiswa_id)
        .values(**_values(payload))
        .returning(*_COLUMNS)
        .execution_options(synchronize_session=False)
    )
    row = _write(db, stmt)
    if row is None:
        return None

    logger.info("mahasiswa.updated", extra={"mahasiswa_id": mahasiswa_id})
    return MahasiswaRecord.model_validate(dict(row))


def delete_mahasiswa(db: Session, mahasiswa_id: int) -> bool:
    get_metrics().observe_db_query("delete")
    stmt = (
        delete(Mahasiswa)
        .where(Mahasiswa.id == mahasiswa_id)
        .returning(Mahasiswa.id)
        .execution_options(synchronize_session=False)
    )
    deleted = _write(db, stmt)
    if deleted is None:
        return False

    logger.info("mahasiswa.deleted", extra={"mahasiswa_id": mahasiswa_id})
    return True
