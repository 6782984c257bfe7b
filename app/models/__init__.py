"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Database.create_all() creates every table; no migration scripts needed for fresh installs.
"""
from app.models.user import User, UserRole
from app.models.listing import Listing, ListingAmenity
from app.models.reservation import Reservation

__all__ = [
    "User",
    "UserRole",
    "Listing",
    "ListingAmenity",
    "Reservation",
]
