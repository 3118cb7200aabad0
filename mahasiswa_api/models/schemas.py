from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

REQUIRED_FIELDS = ("nim", "nama", "jurusan", "angkatan")


class MahasiswaPayload(BaseModel):
    """Request body for create/update.

    Fields stay optional here so a missing value yields the API's own 400
    instead of FastAPI's 422; see ``missing_fields``. Falsy raw values
    (``0``, ``false``, ``""``) count as missing before any coercion.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    nim: str | None = None
    nama: str | None = None
    jurusan: str | None = None
    angkatan: str | None = None

    @field_validator(*REQUIRED_FIELDS, mode="before")
    @classmethod
    def _falsy_is_missing(cls, value: Any) -> Any:
        if not value:
            return None
        if value is True:
            return "true"
        return value

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


class MahasiswaRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nim: str
    nama: str
    jurusan: str
    angkatan: str


class HealthResponse(BaseModel):
    status: str
    message: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
