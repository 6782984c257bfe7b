"""Reservation schemas."""
from datetime import date, datetime
from pydantic import Field, field_validator
from app.schemas.common import CamelModel
from app.schemas.listing import ListingResponse


class ReservationCreate(CamelModel):
    listing_id: int
    check_in: date
    check_out: date
    guests: int = Field(ge=1)
    total_price: float = Field(ge=0)

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def date_part_only(cls, v):
        # "2023-12-15T00:00:00Z" is accepted and truncated to the calendar date
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v


class ReservationResponse(CamelModel):
    id: int
    user_id: int
    listing_id: int
    check_in: date
    check_out: date
    guests: int
    total_price: float
    created_at: datetime | None = None
    listing: ListingResponse | None = None


class CancelReservationResponse(CamelModel):
    message: str
    id: int
