import pytest
from sqlalchemy.exc import IntegrityError

from mahasiswa_api.models.schemas import MahasiswaPayload
from mahasiswa_api.services import mahasiswa_service
from mahasiswa_api.services.mahasiswa_service import (
    DuplicateNimError,
    create_mahasiswa,
    delete_mahasiswa,
    get_mahasiswa,
    list_mahasiswa,
    update_mahasiswa,
)


def _payload(nim: str = "123", **overrides: str) -> MahasiswaPayload:
    fields = {"nim": nim, "nama": "Ann", "jurusan": "CS", "angkatan": "2024", **overrides}
    return MahasiswaPayload(**fields)


def test_create_returns_persisted_row(db) -> None:
    record = create_mahasiswa(db, _payload())
    assert record.id == 1
    assert get_mahasiswa(db, record.id) == record


def test_duplicate_nim_raises_and_session_stays_usable(db) -> None:
    first = create_mahasiswa(db, _payload())

    with pytest.raises(DuplicateNimError):
        create_mahasiswa(db, _payload(nama="Other"))

    # Rolled back, so the same session keeps working.
    assert list_mahasiswa(db) == [first]


def test_update_replaces_all_fields(db) -> None:
    record = create_mahasiswa(db, _payload())
    updated = update_mahasiswa(db, record.id, _payload(nim="124", nama="Bea", jurusan="EE", angkatan="2025"))

    assert updated is not None
    assert updated.model_dump() == {"id": record.id, "nim": "124", "nama": "Bea", "jurusan": "EE", "angkatan": "2025"}
    assert get_mahasiswa(db, record.id) == updated


def test_update_and_delete_of_missing_id(db) -> None:
    assert update_mahasiswa(db, 5, _payload()) is None
    assert delete_mahasiswa(db, 5) is False
    assert list_mahasiswa(db) == []


def test_delete_removes_row(db) -> None:
    record = create_mahasiswa(db, _payload())
    assert delete_mahasiswa(db, record.id) is True
    assert get_mahasiswa(db, record.id) is None


def test_values_are_bound_not_interpolated(db) -> None:
    hostile = "x'); DROP TABLE mahasiswa; --"
    record = create_mahasiswa(db, _payload(nama=hostile))
    assert get_mahasiswa(db, record.id).nama == hostile
    assert len(list_mahasiswa(db)) == 1


class _PgError(Exception):
    def __init__(self, sqlstate: str) -> None:
        super().__init__("duplicate key value violates unique constraint")
        self.sqlstate = sqlstate


def test_postgres_unique_violation_is_recognised() -> None:
    exc = IntegrityError("INSERT", {}, _PgError("23505"))
    assert mahasiswa_service._is_unique_violation(exc)


def test_other_integrity_errors_are_not_duplicates() -> None:
    exc = IntegrityError("INSERT", {}, _PgError("23502"))
    assert not mahasiswa_service._is_unique_violation(exc)
