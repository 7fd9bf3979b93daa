"""
Trazure Backend — Diagnostic Routes
=====================================

GET /test/users lists users for local debugging. Only mounted when
ENABLE_DIAGNOSTICS is set; responses go through UserPublic, which has no
credential fields.
"""

from typing import List

from fastapi import APIRouter

from trazure.dependencies import DbSession
from trazure.schemas.user import UserPublic
from trazure.services.user_service import user_service

router = APIRouter(prefix="/test", tags=["Diagnostics"])


@router.get("/users", response_model=List[UserPublic], summary="List users (diagnostic)")
async def list_users(db: DbSession) -> List[UserPublic]:
    return await user_service.list_users(db)
