"""
Hersteller Service — Write Service (Business Logic Orchestrator)
=================================================================

What:  Create, update and delete manufacturers behind validation gates.
How:   Each operation runs its gates in a fixed order and returns the first
       failing gate's outcome as a value (see services.errors). Only when
       every gate passes does it touch the database.
Who:   Called by the write routes and the GraphQL mutations.

Gate Order:
    create:  validate → unique name → insert + commit → notify (background)
    update:  id shape → version token → validate → unique name
             → exists → version not behind → merge + conditional commit
    delete:  id shape → delete keywords, then the record (one transaction)

Optimistic Locking:
    The version check above compares the caller's token with the stored
    version. Between that check and the commit another writer may win, so
    the UPDATE itself is conditional on the loaded version (version_id_col,
    see models.hersteller). A lost race surfaces as StaleDataError and is
    reported as VersionOutdated, the same as a failed pre-check.

Notification:
    After a successful create, a mail is sent from a background task. A
    failed send is logged and otherwise ignored. The service keeps strong
    references to running tasks until they finish.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Set, Union

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from hersteller_api.exceptions import DatabaseError
from hersteller_api.models.hersteller import Hersteller, Schlagwort
from hersteller_api.schemas.hersteller import HerstellerCreate, HerstellerUpdate
from hersteller_api.services.errors import (
    ConstraintViolations,
    CreateError,
    HerstellerNotExists,
    NameExists,
    UpdateError,
    VersionInvalid,
    VersionOutdated,
)
from hersteller_api.services.mail_service import MailService
from hersteller_api.services.read_service import HerstellerReadService
from hersteller_api.services.validation_service import HerstellerValidationService
from hersteller_api.services.version import decode_version

logger = logging.getLogger(__name__)

# Business fields a caller may set; id, version and timestamps are service-owned
UPDATABLE_FIELDS = ("name", "telephone", "homepage")

# Unique index on hersteller.name (models.hersteller, alembic 001)
NAME_INDEX = "ix_hersteller_name"


def _violates_unique_name(error: IntegrityError) -> bool:
    # PostgreSQL names the index, SQLite names the column
    detail = str(error.orig)
    return NAME_INDEX in detail or "hersteller.name" in detail


class HerstellerWriteService:
    """
    Mutating operations on manufacturers.

    Long-lived: one instance per application, sessions are passed per call.
    """

    def __init__(
        self,
        read_service: HerstellerReadService,
        validation_service: HerstellerValidationService,
        mail_service: MailService,
    ):
        self.read_service = read_service
        self.validation_service = validation_service
        self.mail_service = mail_service
        self._background_tasks: Set[asyncio.Task] = set()

    # ── Create ────────────────────────────────────────────────────────────

    async def create(self, db: AsyncSession, payload: HerstellerCreate) -> Union[str, CreateError]:
        """
        Persist a new manufacturer with its keywords.

        Returns:
            The new id, or ConstraintViolations / NameExists.

        Raises:
            DatabaseError: The insert failed for a reason other than a
                           concurrent duplicate name (including any other
                           integrity violation).
        """
        logger.debug("create: payload=%s", payload)

        messages = self.validation_service.validate(payload)
        if messages:
            return ConstraintViolations(messages=tuple(messages))

        existing = await self._find_by_exact_name(db, payload.name)
        if existing is not None:
            logger.debug("create: name %r taken by %s", payload.name, existing.id)
            return NameExists(name=payload.name, id=existing.id)

        hersteller = Hersteller(
            id=str(uuid.uuid4()),
            name=payload.name,
            telephone=payload.telephone,
            homepage=payload.homepage,
            schlagwoerter=[Schlagwort(schlagwort=s.upper()) for s in payload.schlagwoerter],
        )
        db.add(hersteller)

        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            if _violates_unique_name(e):
                # a concurrent create got there first
                logger.info("create: concurrent duplicate name %r", payload.name)
                return NameExists(name=payload.name)
            logger.error("Integrity error creating manufacturer: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the manufacturer. Please try again.",
                context={"name": payload.name},
            )
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error creating manufacturer: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the manufacturer. Please try again.",
                context={"name": payload.name},
            )

        logger.info("Manufacturer created: %s (%s)", hersteller.id, hersteller.name)
        self._schedule_notification(hersteller.id, hersteller.name)
        return hersteller.id

    # ── Update ────────────────────────────────────────────────────────────

    async def update(
        self,
        db: AsyncSession,
        id: Optional[str],
        payload: HerstellerUpdate,
        version_token: Optional[str],
    ) -> Union[int, UpdateError]:
        """
        Replace the business fields of an existing manufacturer.

        Args:
            db: Async database session
            id: Manufacturer id
            payload: New field values; fields left as None keep their value
            version_token: The caller's version, e.g. '"3"' (If-Match)

        Returns:
            The new version number, or the outcome of the first failing gate.
        """
        logger.debug("update: id=%s payload=%s version=%s", id, payload, version_token)

        if id is None or not self.validation_service.validate_id(id):
            return HerstellerNotExists(id=id)

        version = decode_version(version_token)
        if isinstance(version, VersionInvalid):
            return version

        messages = self.validation_service.validate(payload)
        if messages:
            return ConstraintViolations(messages=tuple(messages))

        if payload.name is not None:
            existing = await self._find_by_exact_name(db, payload.name)
            if existing is not None and existing.id != id:
                return NameExists(name=payload.name, id=existing.id)

        stored = await self.read_service.find_by_id(db, id)
        if stored is None:
            return HerstellerNotExists(id=id)

        if version < stored.version:
            logger.debug("update: version %d behind stored %d", version, stored.version)
            return VersionOutdated(id=id, version=version)

        for field in UPDATABLE_FIELDS:
            value = getattr(payload, field)
            if value is not None:
                setattr(stored, field, value)
        # Always emits an UPDATE, so the version advances even without changes
        stored.updated_at = datetime.now(timezone.utc)

        try:
            await db.commit()
        except StaleDataError:
            await db.rollback()
            logger.info("update: %s changed concurrently, version %d lost", id, version)
            return VersionOutdated(id=id, version=version)
        except IntegrityError as e:
            await db.rollback()
            if _violates_unique_name(e):
                return NameExists(name=payload.name)
            logger.error("Integrity error updating manufacturer %s: %s", id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the manufacturer. Please try again.",
                context={"hersteller_id": id},
            )
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error updating manufacturer %s: %s", id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the manufacturer. Please try again.",
                context={"hersteller_id": id},
            )

        logger.info("Manufacturer updated: %s → version %d", id, stored.version)
        return stored.version

    # ── Delete ────────────────────────────────────────────────────────────

    async def delete(self, db: AsyncSession, id: Optional[str]) -> bool:
        """
        Remove a manufacturer and its keywords atomically.

        There is no separate existence lookup: the rowcount of the
        manufacturer DELETE answers it inside the same transaction, so an
        absent id yields False exactly as a failed lookup would.

        Returns:
            True iff a manufacturer row was deleted.

        Raises:
            DatabaseError or the original exception; the transaction is
            rolled back first, leaving every row in place.
        """
        if not self.validation_service.validate_id(id):
            logger.debug("delete: malformed id %r", id)
            return False

        try:
            await db.execute(delete(Schlagwort).where(Schlagwort.hersteller_id == id))
            result = await db.execute(delete(Hersteller).where(Hersteller.id == id))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error deleting manufacturer %s: %s", id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the manufacturer. Please try again.",
                context={"hersteller_id": id},
            )
        except Exception:
            await db.rollback()
            raise

        deleted = result.rowcount > 0
        logger.info("Manufacturer delete: %s (deleted=%s)", id, deleted)
        return deleted

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _find_by_exact_name(self, db: AsyncSession, name: str) -> Optional[Hersteller]:
        # find() matches substrings case-insensitively; uniqueness is exact
        candidates = await self.read_service.find(db, {"name": name})
        return next((h for h in candidates if h.name == name), None)

    def _schedule_notification(self, hersteller_id: str, name: str) -> None:
        task = asyncio.create_task(self._notify(hersteller_id, name))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def _notify(self, hersteller_id: str, name: str) -> None:
        subject = f"New manufacturer {hersteller_id}"
        body = f"The manufacturer named <strong>{name}</strong> has been created."
        try:
            await self.mail_service.send(subject, body)
        except Exception as e:
            logger.warning("Notification for %s failed: %s", hersteller_id, str(e), exc_info=True)
