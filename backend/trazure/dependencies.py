"""
Trazure Backend — Shared Dependencies
=======================================

What:  FastAPI dependencies injected into route handlers with Depends().
Why:   The caller's identity is resolved once per request and passed to
       services explicitly, instead of services assuming a fixed user.

Identity resolution (no authentication yet):
    X-User-Id header present  → that user id (must be a positive integer)
    header absent             → settings.default_user_id

Usage:
    @router.get("/footprints")
    async def list_footprints(identity: CurrentIdentity, db: DbSession):
        ...
"""

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from trazure.config import settings
from trazure.database import get_db_session
from trazure.exceptions import ValidationError


@dataclass(frozen=True)
class RequestIdentity:
    """Who the current request acts as."""
    user_id: int


def get_request_identity(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
) -> RequestIdentity:
    if x_user_id is None:
        return RequestIdentity(user_id=settings.default_user_id)

    try:
        user_id = int(x_user_id.strip())
    except ValueError:
        user_id = 0

    if user_id < 1:
        raise ValidationError(
            message="X-User-Id must be a positive integer",
            field="X-User-Id",
        )
    return RequestIdentity(user_id=user_id)


CurrentIdentity = Annotated[RequestIdentity, Depends(get_request_identity)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
