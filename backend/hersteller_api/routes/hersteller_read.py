"""
Hersteller Service — REST Read Routes
=======================================

What:  GET /rest/{id} (detail) and GET /rest (search).
How:   Delegates to HerstellerReadService and renders HAL responses whose
       `_links` are absolute URLs derived from the request.
Who:   Called by REST clients.

Conditional GET:
    The ETag is the version token ('"3"'). A request whose If-None-Match
    equals the current token gets 304 without a body.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from hersteller_api.database import get_db_session
from hersteller_api.dependencies import get_read_service
from hersteller_api.exceptions import NotFoundError
from hersteller_api.models.hersteller import Hersteller
from hersteller_api.schemas.hersteller import (
    EmbeddedHerstellers,
    ErrorResponse,
    HerstellerModel,
    HerstellersModel,
    Link,
    Links,
)
from hersteller_api.services.read_service import HerstellerReadService
from hersteller_api.services.version import encode_version

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/rest", tags=["Hersteller"])


def base_url(request: Request) -> str:
    """Absolute URL of the collection, e.g. http://localhost:8000/rest."""
    return f"{str(request.base_url).rstrip('/')}{router.prefix}"


def to_model(hersteller: Hersteller, base: str, detail: bool = True) -> HerstellerModel:
    """Render a record; list items only carry their `self` link."""
    href = f"{base}/{hersteller.id}"
    if detail:
        links = Links(
            self_link=Link(href=href),
            list_link=Link(href=base),
            add=Link(href=base),
            update=Link(href=href),
            remove=Link(href=href),
        )
    else:
        links = Links(self_link=Link(href=href))
    return HerstellerModel(
        name=hersteller.name,
        telephone=hersteller.telephone,
        homepage=hersteller.homepage,
        links=links,
    )


@router.get(
    "/{id}",
    response_model=HerstellerModel,
    responses={
        200: {"description": "The manufacturer", "model": HerstellerModel},
        304: {"description": "Not modified since the given ETag"},
        404: {"description": "No manufacturer with this id", "model": ErrorResponse},
    },
    summary="Find a manufacturer by id",
)
async def find_by_id(
    id: str,
    request: Request,
    response: Response,
    if_none_match: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db_session),
    reader: HerstellerReadService = Depends(get_read_service),
):
    hersteller = await reader.find_by_id(db, id)
    if hersteller is None:
        raise NotFoundError(resource="manufacturer", resource_id=id)

    etag = encode_version(hersteller.version)
    if if_none_match == etag:
        logger.debug("find_by_id: %s not modified", id)
        return Response(status_code=304)

    response.headers["ETag"] = etag
    return to_model(hersteller, base_url(request))


@router.get(
    "",
    response_model=HerstellersModel,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Matching manufacturers", "model": HerstellersModel},
        404: {"description": "Nothing matched", "model": ErrorResponse},
    },
    summary="Search manufacturers",
    description=(
        "Every query parameter is a search criterion. `name` matches substrings "
        "case-insensitively; `javascript` and `typescript` require the keyword. "
        "Unknown parameters match nothing."
    ),
)
async def find(
    request: Request,
    name: Optional[str] = Query(default=None),
    telephone: Optional[str] = Query(default=None),
    homepage: Optional[str] = Query(default=None),
    javascript: Optional[bool] = Query(default=None),
    typescript: Optional[bool] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
    reader: HerstellerReadService = Depends(get_read_service),
) -> HerstellersModel:
    # Raw parameters so unknown keys reach the reader; flags use the parsed bools
    criteria = dict(request.query_params)
    for flag, value in (("javascript", javascript), ("typescript", typescript)):
        if flag in criteria:
            criteria[flag] = value

    herstellers = await reader.find(db, criteria)
    if not herstellers:
        raise NotFoundError(resource="manufacturer")

    base = base_url(request)
    return HerstellersModel(
        embedded=EmbeddedHerstellers(
            herstellers=[to_model(h, base, detail=False) for h in herstellers]
        )
    )
