"""
Trazure Backend — Footprint Service
=====================================

What:  The footprint operations: light up a place, list my footprints,
       look one up.
Why:   Keeps ownership, defaulting and validation rules out of the routes.
How:   Builds a FootprintRepository around the request's session; wraps
       storage failures in PersistenceError.
Who:   Called by the /footprints route handlers.

Ownership:
    The owner always comes from the RequestIdentity the route passes in,
    never from the request body. Reads are scoped to that owner as well.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from trazure.dependencies import RequestIdentity
from trazure.exceptions import NotFoundError, PersistenceError, ValidationError
from trazure.models.footprint import Footprint
from trazure.repositories import FootprintRepository
from trazure.schemas.footprint import FootprintCreate, FootprintResponse

logger = logging.getLogger(__name__)


def _check_coordinate(name: str, value: Optional[Decimal], bound: int) -> None:
    if value is None:
        raise ValidationError(message=f"{name} is required", field=name)
    if not value.is_finite() or not -bound <= value <= bound:
        raise ValidationError(
            message=f"{name} must be between -{bound} and {bound}",
            field=name,
            context={"value": str(value)},
        )


class FootprintService:
    """
    Business logic layer for footprints.

    Stateless: the session and identity arrive with every call.
    """

    def validate(self, payload: FootprintCreate) -> None:
        """Reject footprints that cannot be placed on the map."""
        _check_coordinate("latitude", payload.latitude, 90)
        _check_coordinate("longitude", payload.longitude, 180)

    async def light_up(
        self,
        db: AsyncSession,
        identity: RequestIdentity,
        payload: FootprintCreate,
    ) -> int:
        """
        Record a new footprint for the caller.

        Workflow:
            1. Validate coordinates (before touching storage)
            2. Assign owner from identity; default visit_time to now
            3. Insert and commit one row
            4. Return the generated id

        Raises:
            ValidationError: Missing or out-of-range coordinates
            PersistenceError: The store rejected the write
        """
        self.validate(payload)

        fields = payload.model_dump(exclude={"meta_data", "visit_time"})
        footprint = Footprint(
            **fields,
            user_id=identity.user_id,
            visit_time=payload.visit_time or datetime.now(timezone.utc),
            meta_data=(
                payload.meta_data.model_dump(by_alias=True)
                if payload.meta_data is not None
                else None
            ),
        )

        try:
            footprint = await FootprintRepository(db).insert(footprint)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                "Failed to light up footprint for user %s: %s",
                identity.user_id,
                str(e),
            )
            raise PersistenceError(
                message="Could not save the footprint. Please try again.",
                context={"error_type": type(e).__name__, "user_id": identity.user_id},
            ) from e

        logger.info(
            "Footprint %s lit up by user %s at %s",
            footprint.id,
            identity.user_id,
            footprint.location_name or "(unnamed)",
        )
        return footprint.id

    async def get_my_footprints(
        self,
        db: AsyncSession,
        identity: RequestIdentity,
    ) -> List[FootprintResponse]:
        """All footprints owned by the caller, in insertion order."""
        try:
            rows = await FootprintRepository(db).list_by_owner(identity.user_id)
        except SQLAlchemyError as e:
            logger.error("Database error listing footprints: %s", str(e), exc_info=True)
            raise PersistenceError(
                message="Could not retrieve footprints. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [FootprintResponse.model_validate(row) for row in rows]

    async def get_footprint(
        self,
        db: AsyncSession,
        identity: RequestIdentity,
        footprint_id: int,
    ) -> FootprintResponse:
        """
        One footprint by id.

        Someone else's footprint is reported as not found, same as a
        missing one, so ids of other users cannot be probed.
        """
        try:
            footprint = await FootprintRepository(db).find_by_id(footprint_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching footprint %s: %s", footprint_id, str(e))
            raise PersistenceError(
                message="Could not retrieve the footprint. Please try again.",
                context={"footprint_id": footprint_id},
            ) from e

        if footprint is None or footprint.user_id != identity.user_id:
            raise NotFoundError(resource="footprint", resource_id=str(footprint_id))

        return FootprintResponse.model_validate(footprint)


footprint_service = FootprintService()
