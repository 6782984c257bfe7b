"""Reservations: a guest's confirmed stay on a listing. Cancellation deletes the row."""
from sqlalchemy import Column, Integer, Numeric, Date, ForeignKey, DateTime, CheckConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("check_out > check_in", name="ck_reservations_positive_stay"),
        CheckConstraint("guests > 0", name="ck_reservations_guests_positive"),
        Index("ix_reservations_listing_dates", "listing_id", "check_in", "check_out"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    listing_id = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False)

    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    guests = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)  # as supplied by the guest

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="reservations")
    listing = relationship("Listing", back_populates="reservations")
