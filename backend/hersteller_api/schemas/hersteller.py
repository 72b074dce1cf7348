"""
Hersteller Service — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the wire contract of the REST API.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI documentation.

Payload types carry no field constraints: the constraint rules
live in HerstellerValidationService, which reports every violation with a
stable message instead of failing on the first one. Identifiers, version
and timestamps are not part of any payload type, so callers cannot set them.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class HerstellerUpdate(BaseModel):
    """Business attributes a caller may replace on an existing manufacturer."""

    name: Optional[str] = Field(default=None, description="Unique manufacturer name")
    telephone: Optional[str] = Field(default=None, description="11-digit telephone number")
    homepage: Optional[str] = Field(default=None, description="Homepage URI")

    model_config = ConfigDict(extra="forbid")


class HerstellerCreate(HerstellerUpdate):
    """Payload for a new manufacturer, optionally with its keywords."""

    schlagwoerter: List[str] = Field(
        default_factory=list,
        description="Keywords owned by the manufacturer, e.g. JAVASCRIPT",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models: HAL representation
# ══════════════════════════════════════════════════════════════════════════


class Link(BaseModel):
    href: str


class Links(BaseModel):
    """HATEOAS links. Only `self` is present on list items."""

    self_link: Link = Field(alias="self")
    list_link: Optional[Link] = Field(default=None, alias="list")
    add: Optional[Link] = None
    update: Optional[Link] = None
    remove: Optional[Link] = None

    model_config = ConfigDict(populate_by_name=True)


class HerstellerModel(BaseModel):
    """
    What:  A manufacturer as returned by GET /rest/{id} and GET /rest.
    How:   id and version travel in the links and the ETag header, not in the body.
    """

    name: str
    telephone: Optional[str] = None
    homepage: Optional[str] = None
    links: Links = Field(alias="_links")

    model_config = ConfigDict(populate_by_name=True)


class EmbeddedHerstellers(BaseModel):
    herstellers: List[HerstellerModel]


class HerstellersModel(BaseModel):
    """Wrapper for search results: {"_embedded": {"herstellers": [...]}}."""

    embedded: EmbeddedHerstellers = Field(alias="_embedded")

    model_config = ConfigDict(populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error format for infrastructure faults (500s, unexpected errors).

    Fields:
        error: Machine-readable error code (e.g., "server_error", "not_found")
        message: Human-readable description
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
    checked_at: Optional[datetime] = Field(default=None, description="Time of this check (UTC)")
