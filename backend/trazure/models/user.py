"""
Trazure Backend — User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table.
Who:   Read by UserRepository; written out-of-band (no registration endpoint).

Table Design Rationale:
    - BIGINT autoincrement id: matches the map client's numeric user ids
    - password_hash: stored here, never serialized (see schemas/user.py)
    - settings_json: opaque per-user preferences (VIP, skins), JSON column
    - is_deleted: soft delete; deleted users are excluded from listings
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import JSON, BigInteger, Boolean, DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trazure.database import Base

# SQLite only autoincrements INTEGER primary keys
BigIntId = BigInteger().with_variant(Integer, "sqlite")

# Largest value a BIGINT primary key can hold
MAX_ID = 2**63 - 1


class User(Base):
    """An account that owns footprints. Read-only from this API."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(64), nullable=False)

    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    avatar_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    settings_json: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)

    is_paid: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    footprints: Mapped[List["Footprint"]] = relationship(  # noqa: F821
        back_populates="owner",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
