"""Listing directory schemas."""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from app.schemas.common import CamelModel


def _clean_tags(v: list[str] | None) -> list[str] | None:
    if v is None:
        return None
    out = []
    for item in v:
        item = (item or "").strip()
        if item and item not in out:
            out.append(item)
    return out


class ListingCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    price_per_night: float = Field(ge=0)
    location: str = Field(min_length=1, max_length=255)
    photos: list[str] = []
    amenities: list[str] = []
    category: str = ""
    max_guests: int = Field(ge=1)

    @field_validator("amenities")
    @classmethod
    def clean_amenities(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class ListingUpdate(CamelModel):
    """All optional; only provided fields are updated."""
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price_per_night: float | None = Field(default=None, ge=0)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    photos: list[str] | None = None
    amenities: list[str] | None = None
    category: str | None = None
    max_guests: int | None = Field(default=None, ge=1)

    @field_validator("amenities")
    @classmethod
    def clean_amenities(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tags(v)


class ListingResponse(CamelModel):
    id: int
    owner_id: int
    title: str
    description: str
    price_per_night: float
    location: str
    photos: list[str] = []
    amenities: list[str] = []
    category: str
    max_guests: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("photos", mode="before")
    @classmethod
    def coerce_photos(cls, v: list[str] | None) -> list[str]:
        return list(v or [])


class ListingQuery(BaseModel):
    """Parsed query-string filters for GET /listings and GET /listings/filter."""
    min_price: float | None = None
    max_price: float | None = None
    location: str | None = None
    category: str | None = None
    amenities: list[str] = []
    guests: int | None = None
    sort_by: str | None = None
    order: str | None = None
    skip: int = 0
    take: int | None = None  # configured page size when omitted

    @staticmethod
    def split_amenities(raw: str | None) -> list[str]:
        """'wifi, kitchen,,pool' -> ['wifi', 'kitchen', 'pool']"""
        if not raw:
            return []
        return _clean_tags(raw.split(","))
