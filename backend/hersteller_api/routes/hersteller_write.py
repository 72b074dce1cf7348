"""
Hersteller Service — REST Write Routes
========================================

What:  POST /rest, PUT /rest/{id}, DELETE /rest/{id}.
How:   Delegates to HerstellerWriteService and maps its outcomes to status
       codes. Business outcomes never reach the global exception handlers.

Outcome Mapping:
    created                         → 201 + Location
    updated                         → 204 + ETag
    ConstraintViolations            → 422, JSON list of messages
    NameExists                      → 422, text/plain
    HerstellerNotExists             → 412, text/plain
    VersionInvalid, VersionOutdated → 412, text/plain
    PUT without If-Match            → 428
    DELETE                          → 204, whether or not the record existed
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hersteller_api.database import get_db_session
from hersteller_api.dependencies import get_write_service
from hersteller_api.routes.hersteller_read import base_url
from hersteller_api.schemas.hersteller import ErrorResponse, HerstellerCreate, HerstellerUpdate
from hersteller_api.services.errors import ConstraintViolations, NameExists
from hersteller_api.services.version import encode_version
from hersteller_api.services.write_service import HerstellerWriteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rest", tags=["Hersteller"])


def _error_response(result) -> Response:
    if isinstance(result, ConstraintViolations):
        return JSONResponse(status_code=422, content=list(result.messages))
    if isinstance(result, NameExists):
        return PlainTextResponse(result.message, status_code=422)
    # HerstellerNotExists, VersionInvalid, VersionOutdated
    return PlainTextResponse(result.message, status_code=412)


@router.post(
    "",
    status_code=201,
    responses={
        201: {"description": "Created; Location points to the new record"},
        422: {"description": "Constraint violations or duplicate name"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a manufacturer",
)
async def create(
    payload: HerstellerCreate,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    writer: HerstellerWriteService = Depends(get_write_service),
) -> Response:
    result = await writer.create(db, payload)
    if not isinstance(result, str):
        logger.debug("create rejected: %s", result)
        return _error_response(result)

    return Response(status_code=201, headers={"Location": f"{base_url(request)}/{result}"})


@router.put(
    "/{id}",
    status_code=204,
    responses={
        204: {"description": "Updated; ETag carries the new version"},
        412: {"description": "Unknown id, invalid or outdated version"},
        422: {"description": "Constraint violations or duplicate name"},
        428: {"description": "If-Match header missing"},
    },
    summary="Update a manufacturer",
)
async def update(
    id: str,
    payload: HerstellerUpdate,
    if_match: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db_session),
    writer: HerstellerWriteService = Depends(get_write_service),
) -> Response:
    if if_match is None:
        return PlainTextResponse('Header "If-Match" is missing', status_code=428)

    result = await writer.update(db, id, payload, if_match)
    if not isinstance(result, int):
        logger.debug("update rejected: %s", result)
        return _error_response(result)

    return Response(status_code=204, headers={"ETag": encode_version(result)})


@router.delete(
    "/{id}",
    status_code=204,
    summary="Delete a manufacturer",
)
async def delete(
    id: str,
    db: AsyncSession = Depends(get_db_session),
    writer: HerstellerWriteService = Depends(get_write_service),
) -> Response:
    await writer.delete(db, id)
    return Response(status_code=204)
