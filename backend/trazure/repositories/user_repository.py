from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trazure.models.user import MAX_ID, User


class UserRepository:
    """Read-only data access for users; accounts are provisioned out-of-band."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_active(self) -> List[User]:
        result = await self.db.execute(
            select(User).where(User.is_deleted.is_(False)).order_by(User.id)
        )
        return list(result.scalars().all())

    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Active user by id; soft-deleted users are treated as absent."""
        if not 0 < user_id <= MAX_ID:
            return None
        result = await self.db.execute(
            select(User).where(User.id == user_id, User.is_deleted.is_(False))
        )
        return result.scalar_one_or_none()
