"""Reservation booking engine.

A reservation is either CONFIRMED (row exists) or gone (cancelled = deleted).
Booking checks run cheapest first: role, listing, capacity, stay length, then
the overlap query. The listing row is locked (SELECT ... FOR UPDATE) for the
rest of the transaction, so two requests for the same listing cannot both pass
the overlap check before one of them commits. SQLite ignores FOR UPDATE;
there every transaction starts with BEGIN IMMEDIATE (see app.database), which
takes the database write lock up front and gives the same guarantee.
"""
import logging
from datetime import date

from sqlalchemy.orm import Session, joinedload

from app.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.models.listing import Listing
from app.models.reservation import Reservation
from app.schemas.reservation import ReservationCreate
from app.services.roles import require_role

log = logging.getLogger(__name__)


def nights(check_in: date, check_out: date) -> int:
    return (check_out - check_in).days


def find_overlap(db: Session, listing_id: int, check_in: date, check_out: date) -> Reservation | None:
    """First reservation on the listing whose dates intersect [check_in, check_out].

    Bounds are inclusive: a stay that starts on another stay's check-out day
    counts as overlapping.
    """
    return (
        db.query(Reservation)
        .filter(
            Reservation.listing_id == listing_id,
            Reservation.check_in <= check_out,
            Reservation.check_out >= check_in,
        )
        .first()
    )


def _reject(listing_id: int, caller_id: int, err: Exception) -> Exception:
    log.info("Booking rejected: listing=%s guest=%s reason=%s", listing_id, caller_id, err)
    return err


def book(db: Session, data: ReservationCreate, caller_id: int) -> Reservation:
    require_role(db, caller_id, "book", "Only guests can make reservations")

    listing = (
        db.query(Listing)
        .filter(Listing.id == data.listing_id)
        .with_for_update()
        .first()
    )
    if not listing:
        raise NotFoundError("Listing not found")

    if data.guests > listing.max_guests:
        raise _reject(listing.id, caller_id, ValidationError("Number of guests exceeds maximum allowed"))

    if nights(data.check_in, data.check_out) <= 0:
        raise _reject(listing.id, caller_id, ValidationError("Check-out must be after check-in"))

    if find_overlap(db, listing.id, data.check_in, data.check_out):
        raise _reject(listing.id, caller_id, ConflictError("Dates overlap with another booking"))

    # total_price is taken as supplied; no server-side recomputation
    reservation = Reservation(
        user_id=caller_id,
        listing_id=listing.id,
        check_in=data.check_in,
        check_out=data.check_out,
        guests=data.guests,
        total_price=data.total_price,
    )
    db.add(reservation)
    db.commit()
    db.refresh(reservation)
    log.info(
        "Reservation %s booked: listing=%s guest=%s %s..%s",
        reservation.id, listing.id, caller_id, reservation.check_in, reservation.check_out,
    )
    return reservation


def list_for_user(db: Session, user_id: int) -> list[Reservation]:
    return (
        db.query(Reservation)
        .options(joinedload(Reservation.listing).selectinload(Listing.amenity_rows))
        .filter(Reservation.user_id == user_id)
        .order_by(Reservation.check_in.asc(), Reservation.id.asc())
        .all()
    )


def cancel(db: Session, reservation_id: int, caller_id: int) -> dict:
    reservation = db.query(Reservation).filter(Reservation.id == reservation_id).first()
    if not reservation:
        raise NotFoundError("Reservation not found")
    if reservation.user_id != caller_id:
        raise ForbiddenError("Not authorized to cancel this reservation")
    db.delete(reservation)
    db.commit()
    log.info("Reservation %s cancelled by guest %s", reservation_id, caller_id)
    return {"message": "Reservation cancelled successfully", "id": reservation_id}
