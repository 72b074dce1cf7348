"""
Hersteller Service — Hersteller SQLAlchemy Models
===================================================

What:  ORM models for the `hersteller` table and its owned `schlagwort` rows.
How:   Inherit from the shared DeclarativeBase; Alembic reads them for migrations.
Who:   Used by the Reader and Writer services and by Alembic.

Table Design:
    - id: UUID string generated by the Writer (never client-supplied)
    - version: optimistic-lock counter, see Optimistic Locking below
    - name: unique index; the Writer checks uniqueness first, the index
      catches concurrent creates that slip past that check
    - created_at / updated_at: maintained by the service, never by callers

Optimistic Locking:
    `version` is mapped as SQLAlchemy's version_id_col. Every ORM UPDATE is
    emitted as

        UPDATE hersteller SET ..., version = :n_plus_1
        WHERE hersteller.id = :id AND hersteller.version = :n

    and raises StaleDataError when no row matched, i.e. someone else
    committed a newer version in between. The generator starts at 0.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hersteller_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _next_version(current: Optional[int]) -> int:
    """Version generator: 0 for a fresh row, otherwise the successor."""
    return 0 if current is None else current + 1


class Hersteller(Base):
    """
    A manufacturer record.

    Lifecycle:
        1. Created by the Writer (id assigned, version 0)
        2. Mutated only through Writer.update (version advanced on each UPDATE)
        3. Deleted by Writer.delete together with its Schlagwort rows
    """

    __tablename__ = "hersteller"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="UUID assigned by the service on creation",
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Optimistic-lock counter, 0 on insert",
    )

    name: Mapped[str] = mapped_column(
        String(40),
        nullable=False,
        unique=True,
        index=True,
    )

    telephone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    homepage: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    # Owned children, loaded together with the parent (async sessions cannot lazy-load)
    schlagwoerter: Mapped[List["Schlagwort"]] = relationship(
        back_populates="hersteller",
        lazy="selectin",
        order_by="Schlagwort.schlagwort",
    )

    __mapper_args__ = {
        "version_id_col": version,
        "version_id_generator": _next_version,
    }

    def __repr__(self) -> str:
        return (
            f"<Hersteller(id={self.id}, version={self.version}, "
            f"name='{self.name}')>"
        )


class Schlagwort(Base):
    """A keyword owned by exactly one Hersteller (e.g. JAVASCRIPT, TYPESCRIPT)."""

    __tablename__ = "schlagwort"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    hersteller_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("hersteller.id"),
        nullable=False,
        index=True,
    )

    schlagwort: Mapped[str] = mapped_column(String(16), nullable=False)

    hersteller: Mapped["Hersteller"] = relationship(back_populates="schlagwoerter")

    def __repr__(self) -> str:
        return f"<Schlagwort(id={self.id}, schlagwort='{self.schlagwort}')>"
