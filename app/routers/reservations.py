"""Booking, listing and cancelling the caller's reservations."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.schemas.auth import AuthContext
from app.schemas.reservation import CancelReservationResponse, ReservationCreate, ReservationResponse
from app.services import reservations as reservation_service

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.post("", response_model=ReservationResponse)
def create_reservation(
    data: ReservationCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    """Guest only. 400 on capacity, stay length or overlapping dates."""
    reservation = reservation_service.book(db, data, current_user.id)
    return ReservationResponse.model_validate(reservation)


@router.get("/me", response_model=list[ReservationResponse])
def my_reservations(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    reservations = reservation_service.list_for_user(db, current_user.id)
    return [ReservationResponse.model_validate(r) for r in reservations]


@router.delete("/{reservation_id}", response_model=CancelReservationResponse)
def cancel_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return reservation_service.cancel(db, reservation_id, current_user.id)
