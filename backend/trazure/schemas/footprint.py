"""
Trazure Backend — Footprint Request/Response Schemas
======================================================

What:  Pydantic models defining the footprint API contract.
Why:   The map client speaks camelCase JSON (locationName, visitTime, ...);
       the ORM speaks snake_case. Aliases bridge the two.
How:   alias_generator=to_camel for the wire, populate_by_name so Python
       code and snake_case clients keep working. FastAPI serializes
       response models by alias.

Design Decision:
    FootprintCreate deliberately has no id, userId, createdAt or updatedAt.
    Those are server-assigned; extra keys in the body are ignored.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

# Fixed precision in storage, plain JSON number on the wire
Coordinate = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]

CURRENT_METADATA_VERSION = 1


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FootprintMetadata(CamelModel):
    """
    Versioned extension object stored in footprints.meta_data.

    data is free-form; schemaVersion says how to read it.
    """
    schema_version: int = Field(default=CURRENT_METADATA_VERSION, ge=1)
    data: Dict[str, Any] = Field(default_factory=dict)


class MemoryCapsule(CamelModel):
    """Reflective free-text fields shared by create and response models."""
    description: Optional[str] = None
    purpose: Optional[str] = None
    companions: Optional[str] = None
    cost: Optional[str] = None
    transport_mode: Optional[str] = None
    pois: Optional[str] = None
    highlight: Optional[str] = None
    pets: Optional[str] = None
    bad_experience: Optional[str] = None
    new_friends: Optional[str] = None


class FootprintCreate(MemoryCapsule):
    """
    What:  Body of POST /footprints.
    Who:   Sent by the map client when the user lights up a place.

    latitude/longitude are Optional at the schema level so that a missing
    coordinate is reported by the service as a 400 validation_error with the
    offending field, rather than as a generic 422.
    """
    latitude: Optional[Coordinate] = None
    longitude: Optional[Coordinate] = None
    location_name: Optional[str] = Field(default=None, max_length=255)
    country_code: Optional[str] = Field(default=None, max_length=16)
    region_id: Optional[str] = Field(default=None, max_length=64)
    layer_type: Optional[str] = Field(default=None, max_length=32)
    category: Optional[str] = Field(default=None, max_length=64)
    mood: Optional[str] = Field(default=None, max_length=64)
    is_bucket_list: bool = False
    meta_data: Optional[FootprintMetadata] = None
    visit_time: Optional[datetime] = None


class FootprintResponse(MemoryCapsule):
    """
    What:  Full persisted footprint.
    Who:   Returned by GET /footprints (as an array) and GET /footprints/{id}.
    """
    id: int
    user_id: int
    latitude: Coordinate
    longitude: Coordinate
    location_name: Optional[str] = None
    country_code: Optional[str] = None
    region_id: Optional[str] = None
    layer_type: Optional[str] = None
    category: Optional[str] = None
    mood: Optional[str] = None
    is_bucket_list: bool = False
    meta_data: Optional[FootprintMetadata] = None
    visit_time: datetime
    created_at: datetime
    updated_at: datetime

    @field_validator("meta_data", mode="before")
    @classmethod
    def wrap_legacy_metadata(cls, v: Any) -> Any:
        """Rows written before versioning hold a bare value; read it as version 1 data."""
        if v is None or isinstance(v, FootprintMetadata):
            return v
        if isinstance(v, dict) and ("schemaVersion" in v or "schema_version" in v):
            return v
        return {"schemaVersion": CURRENT_METADATA_VERSION, "data": {"legacy": v}}


class LightUpResponse(BaseModel):
    """Response of POST /footprints: the new footprint's id."""
    id: int = Field(description="Generated footprint identifier")
    message: str = Field(default="Footprint lit up")
