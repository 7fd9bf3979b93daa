"""
Trazure Backend — Footprint Route Handlers
============================================

What:  POST /footprints (light up), GET /footprints (my footprints),
       GET /footprints/{id}.
How:   Resolve the caller's identity, delegate to FootprintService, return JSON.
Who:   Called by the map client.

Route aliases:
    Earlier clients used /footprints/light-up and /footprints/list; both
    are served by the same handlers and hidden from the OpenAPI schema.
"""

import logging
from typing import List

from fastapi import APIRouter

from trazure.dependencies import CurrentIdentity, DbSession
from trazure.schemas.common import ErrorResponse
from trazure.schemas.footprint import (
    FootprintCreate,
    FootprintResponse,
    LightUpResponse,
)
from trazure.services.footprint_service import footprint_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/footprints", tags=["Footprints"])


@router.post(
    "/light-up",
    status_code=201,
    response_model=LightUpResponse,
    include_in_schema=False,
)
@router.post(
    "",
    status_code=201,
    response_model=LightUpResponse,
    responses={
        201: {"description": "Footprint recorded", "model": LightUpResponse},
        400: {"description": "Missing or out-of-range coordinates", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Light up a footprint",
    description=(
        "Records a visited place for the current user. The owner and, when "
        "omitted, the visit time are assigned by the server."
    ),
)
async def light_up(
    payload: FootprintCreate,
    identity: CurrentIdentity,
    db: DbSession,
) -> LightUpResponse:
    footprint_id = await footprint_service.light_up(db=db, identity=identity, payload=payload)
    return LightUpResponse(id=footprint_id)


@router.get(
    "/list",
    response_model=List[FootprintResponse],
    include_in_schema=False,
)
@router.get(
    "",
    response_model=List[FootprintResponse],
    responses={
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="List my footprints",
    description="Returns every footprint of the current user, oldest first. Empty array when none.",
)
async def list_my_footprints(
    identity: CurrentIdentity,
    db: DbSession,
) -> List[FootprintResponse]:
    return await footprint_service.get_my_footprints(db=db, identity=identity)


@router.get(
    "/{footprint_id}",
    response_model=FootprintResponse,
    responses={
        404: {"description": "Footprint not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Get one of my footprints",
)
async def get_footprint(
    footprint_id: int,
    identity: CurrentIdentity,
    db: DbSession,
) -> FootprintResponse:
    return await footprint_service.get_footprint(
        db=db, identity=identity, footprint_id=footprint_id
    )
