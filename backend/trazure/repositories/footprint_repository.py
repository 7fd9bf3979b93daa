from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trazure.models.footprint import Footprint
from trazure.models.user import MAX_ID


class FootprintRepository:
    """
    Narrow data access for footprints.

    There is intentionally no "select everything" method: every read is
    either scoped to an owner or addressed by id.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, footprint: Footprint) -> Footprint:
        self.db.add(footprint)
        await self.db.commit()
        await self.db.refresh(footprint)
        return footprint

    async def list_by_owner(self, user_id: int) -> List[Footprint]:
        result = await self.db.execute(
            select(Footprint)
            .where(Footprint.user_id == user_id)
            .order_by(Footprint.id)
        )
        return list(result.scalars().all())

    async def find_by_id(self, footprint_id: int) -> Optional[Footprint]:
        # Outside BIGINT range: no row can match, and drivers reject the bind
        if not 0 < footprint_id <= MAX_ID:
            return None
        result = await self.db.execute(
            select(Footprint).where(Footprint.id == footprint_id)
        )
        return result.scalar_one_or_none()
