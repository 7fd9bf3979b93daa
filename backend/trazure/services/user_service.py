"""
Trazure Backend — User Service
================================

Read-only user listing for the diagnostic endpoint. Rows are converted to
UserPublic here so no caller ever holds a serializable object that carries
password_hash.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from trazure.exceptions import PersistenceError
from trazure.repositories import UserRepository
from trazure.schemas.user import UserPublic

logger = logging.getLogger(__name__)


class UserService:

    async def list_users(self, db: AsyncSession) -> List[UserPublic]:
        try:
            users = await UserRepository(db).list_active()
        except SQLAlchemyError as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise PersistenceError(
                message="Could not retrieve users. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [UserPublic.model_validate(user) for user in users]


user_service = UserService()
