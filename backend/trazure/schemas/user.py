"""
Trazure Backend — User Response Schema
========================================

UserPublic is the only shape in which a user leaves the API. It has no
password or credential field, so serializing a User row through it cannot
leak one regardless of what the ORM object carries.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserPublic(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    username: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    is_paid: bool = False
    created_at: datetime
