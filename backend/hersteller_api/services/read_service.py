"""
Hersteller Service — Read Service
===================================

What:  Lookup by id and criteria search over manufacturer records.
How:   SQLAlchemy select() statements built from the criteria mapping.
       Keywords are eagerly loaded through the selectin relationship.
Who:   Called by the read routes, the GraphQL queries and by
       HerstellerWriteService for its uniqueness and version checks.

Criteria Semantics:
    {}                         → every record
    {"name": "a"}              → name ILIKE '%a%'
    {"javascript": True}       → owns a Schlagwort JAVASCRIPT
    {"telephone": "0123..."}   → equality on the column
    {"version": "0"}           → equality, after coercion to the column type
    {"version": "abc"}         → []   (value not coercible, no error)
    {"unknown": ...}           → []   (any unknown key, no error)

    LIKE wildcards in a name are matched literally.

    Keys are AND-combined; results are ordered by id.

Reads need no explicit transaction. Driver faults are wrapped in
DatabaseError so they reach the global 500 handler without SQL details.
"""

import logging
from typing import Any, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hersteller_api.exceptions import DatabaseError
from hersteller_api.models.hersteller import Hersteller, Schlagwort
from hersteller_api.services.validation_service import HerstellerValidationService

logger = logging.getLogger(__name__)

# Criteria keys compared by equality
COLUMN_KEYS = frozenset(
    ("id", "version", "name", "telephone", "homepage", "created_at", "updated_at")
)

# Criteria keys that require an owned keyword
KEYWORD_FLAGS = {
    "javascript": "JAVASCRIPT",
    "typescript": "TYPESCRIPT",
}

# REST hands every criterion over as a string; the driver binds typed parameters
COLUMN_ADAPTERS = {
    key: TypeAdapter(Hersteller.__table__.c[key].type.python_type) for key in COLUMN_KEYS
}

LIKE_ESCAPE = "\\"


def _like_pattern(value: str) -> str:
    escaped = (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class HerstellerReadService:
    """
    Read-only access to manufacturers.

    Args:
        validation_service: Used for the cheap id shape check that lets
                            malformed ids miss without a query.
    """

    def __init__(self, validation_service: HerstellerValidationService):
        self.validation_service = validation_service

    async def find_by_id(self, db: AsyncSession, id: Optional[str]) -> Optional[Hersteller]:
        """
        Fetch one manufacturer together with its keywords.

        Returns:
            The record, or None when `id` is malformed or nothing matches.
        """
        if not self.validation_service.validate_id(id):
            logger.debug("find_by_id: malformed id %r", id)
            return None

        try:
            result = await db.execute(select(Hersteller).where(Hersteller.id == id))
            hersteller = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching manufacturer %s: %s", id, str(e))
            raise DatabaseError(
                message="Could not retrieve the manufacturer. Please try again.",
                context={"hersteller_id": id},
            )

        logger.debug("find_by_id: %s → %s", id, hersteller)
        return hersteller

    async def find(
        self,
        db: AsyncSession,
        criteria: Optional[Mapping[str, Any]] = None,
    ) -> List[Hersteller]:
        """
        Search manufacturers by criteria.

        Args:
            db: Async database session
            criteria: Field → value mapping; None or empty returns everything.

        Returns:
            Matching records ordered by id. Empty when nothing matches,
            when any key is not a recognized criterion, or when a value
            cannot be read as its column type.
        """
        criteria = dict(criteria or {})

        unknown = [key for key in criteria if key not in COLUMN_KEYS and key not in KEYWORD_FLAGS]
        if unknown:
            logger.debug("find: unknown criteria %s", unknown)
            return []

        query = select(Hersteller)
        for key, value in criteria.items():
            if key in KEYWORD_FLAGS:
                if value:
                    query = query.where(
                        Hersteller.schlagwoerter.any(Schlagwort.schlagwort == KEYWORD_FLAGS[key])
                    )
                continue

            try:
                value = COLUMN_ADAPTERS[key].validate_python(value)
            except ValidationError:
                logger.debug("find: %s=%r does not fit the column type", key, value)
                return []

            if key == "name":
                query = query.where(Hersteller.name.ilike(_like_pattern(value), escape=LIKE_ESCAPE))
            else:
                query = query.where(getattr(Hersteller, key) == value)
        query = query.order_by(Hersteller.id)

        try:
            result = await db.execute(query)
            herstellers = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error searching manufacturers: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve manufacturers. Please try again.",
                context={"criteria": sorted(criteria)},
            )

        logger.debug("find: %s → %d record(s)", criteria, len(herstellers))
        return herstellers
