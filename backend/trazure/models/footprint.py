"""
Trazure Backend — Footprint SQLAlchemy Model
==============================================

What:  ORM model for the `footprints` table: one recorded visit of one user.
Who:   Written by FootprintService.light_up via FootprintRepository.insert;
       read by the owner-scoped listing and lookup.

Table Design Rationale:
    - NUMERIC(10, 7) coordinates: fixed precision (~1cm), no float drift
    - user_id indexed: every read is "footprints of this owner"
    - Memory capsule: free-text TEXT columns, all nullable
    - meta_data: JSON extension object {"schemaVersion": n, "data": {...}}
    - visit_time: client-supplied or defaulted by the service
    - updated_at: bumped by the ORM on UPDATE

Lifecycle:
    Created on submission; never mutated or deleted by the API.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trazure.database import Base
from trazure.models.user import BigIntId, User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Footprint(Base):
    """A place the user has been, with when and how it felt."""

    __tablename__ = "footprints"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id"),
        nullable=False,
    )

    # ── Placement ─────────────────────────────────────────────────────────
    latitude: Mapped[Decimal] = mapped_column(Numeric(10, 7), nullable=False)
    longitude: Mapped[Decimal] = mapped_column(Numeric(10, 7), nullable=False)
    location_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    country_code: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    region_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    # Map layer the region belongs to (country, province, city)
    layer_type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    # ── Tags ──────────────────────────────────────────────────────────────
    category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    mood: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    is_bucket_list: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    # ── Memory capsule ────────────────────────────────────────────────────
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    purpose: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    companions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cost: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    transport_mode: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pois: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    highlight: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pets: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    bad_experience: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    new_friends: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    meta_data: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)

    # ── Timestamps ────────────────────────────────────────────────────────
    visit_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    owner: Mapped[User] = relationship(back_populates="footprints", lazy="raise")

    __table_args__ = (
        Index("idx_footprints_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Footprint(id={self.id}, user_id={self.user_id}, "
            f"location_name='{self.location_name}')>"
        )
