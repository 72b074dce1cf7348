"""
Hersteller Service — Business Outcomes of the Write Path
=========================================================

What:  Tagged result variants returned (never raised) by the Writer.
How:   Frozen dataclasses; callers dispatch with isinstance(). Each variant
       carries its data plus a stable, human-readable `message`.
Who:   Produced by HerstellerWriteService and the version codec; consumed by
       the REST and GraphQL adapters, which pick status codes / error shapes.

    CreateError = ConstraintViolations | NameExists
    UpdateError = ConstraintViolations | NameExists | HerstellerNotExists
                  | VersionInvalid | VersionOutdated

Faults the service cannot recover from (lost connections, driver errors)
are exceptions instead, see hersteller_api.exceptions.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class ConstraintViolations:
    """The payload broke one or more validation rules."""

    messages: Tuple[str, ...]

    @property
    def message(self) -> str:
        return " ".join(self.messages)


@dataclass(frozen=True)
class NameExists:
    """Another manufacturer already uses this name."""

    name: Optional[str]
    id: Optional[str] = None

    @property
    def message(self) -> str:
        return f'The name "{self.name}" already exists.'


@dataclass(frozen=True)
class HerstellerNotExists:
    """The manufacturer to update is absent or its id is malformed."""

    id: Optional[str]

    @property
    def message(self) -> str:
        return f'There is no manufacturer with the ID "{self.id}".'


@dataclass(frozen=True)
class VersionInvalid:
    """The version token is missing or not a quoted run of digits."""

    version: Optional[str]

    @property
    def message(self) -> str:
        return f'The version number "{self.version}" is invalid.'


@dataclass(frozen=True)
class VersionOutdated:
    """The caller's version is behind the stored one."""

    id: str
    version: int

    @property
    def message(self) -> str:
        return f'The version number "{self.version}" is out of date.'


CreateError = Union[ConstraintViolations, NameExists]

UpdateError = Union[
    ConstraintViolations,
    HerstellerNotExists,
    NameExists,
    VersionInvalid,
    VersionOutdated,
]

# For isinstance() checks in the transport adapters
BUSINESS_ERRORS = (
    ConstraintViolations,
    HerstellerNotExists,
    NameExists,
    VersionInvalid,
    VersionOutdated,
)
