from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Mahasiswa(Base):
    __tablename__ = "mahasiswa"
    # Never hand out an id that a deleted row already used (SQLite only; Postgres sequences already behave this way).
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nim: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    nama: Mapped[str] = mapped_column(String, nullable=False)
    jurusan: Mapped[str] = mapped_column(String, nullable=False)
    angkatan: Mapped[str] = mapped_column(String, nullable=False)
