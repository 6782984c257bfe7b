"""Listing directory: create, browse, filter, update and delete listings."""
import logging

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, selectinload

from app.config import get_settings
from app.errors import ForbiddenError, NotFoundError, ValidationError
from app.models.listing import Listing, ListingAmenity
from app.schemas.listing import ListingCreate, ListingQuery, ListingUpdate
from app.services.roles import require_role

log = logging.getLogger(__name__)

# Public sort keys -> columns
SORT_FIELDS = {
    "createdAt": Listing.created_at,
    "created_at": Listing.created_at,
    "pricePerNight": Listing.price_per_night,
    "price_per_night": Listing.price_per_night,
    "price": Listing.price_per_night,
    "title": Listing.title,
    "maxGuests": Listing.max_guests,
    "max_guests": Listing.max_guests,
    "location": Listing.location,
}

_NON_NULLABLE = {"title", "description", "price_per_night", "location", "photos", "category", "max_guests"}


def create_listing(db: Session, data: ListingCreate, caller_id: int) -> Listing:
    require_role(db, caller_id, "create_listing", "Only hosts can create listings")
    listing = Listing(
        owner_id=caller_id,
        title=data.title,
        description=data.description,
        price_per_night=data.price_per_night,
        location=data.location,
        photos=list(data.photos),
        category=data.category,
        max_guests=data.max_guests,
    )
    listing.set_amenities(data.amenities)
    db.add(listing)
    db.commit()
    db.refresh(listing)
    log.info("Host %s created listing %s", caller_id, listing.id)
    return listing


def get_listing(db: Session, listing_id: int) -> Listing:
    listing = db.query(Listing).filter(Listing.id == listing_id).first()
    if not listing:
        raise NotFoundError("Listing not found")
    return listing


def _page(query: ListingQuery) -> tuple[int, int]:
    settings = get_settings()
    skip = max(query.skip or 0, 0)
    take = query.take if query.take is not None else settings.listing_page_size
    if take < 1:
        raise ValidationError("take must be at least 1")
    return skip, min(take, settings.listing_page_size_max)


def _contains_exact_case(q: Query, column, needle: str):
    """Case-sensitive substring test; LIKE ignores ASCII case on SQLite."""
    if q.session.get_bind().dialect.name == "postgresql":
        return func.strpos(column, needle) > 0
    return func.instr(column, needle) > 0


def _price_and_location(q: Query, query: ListingQuery, case_insensitive: bool) -> Query:
    if query.min_price is not None and query.max_price is not None and query.min_price > query.max_price:
        raise ValidationError("minPrice cannot be greater than maxPrice")
    if query.min_price is not None:
        q = q.filter(Listing.price_per_night >= query.min_price)
    if query.max_price is not None:
        q = q.filter(Listing.price_per_night <= query.max_price)
    if query.location:
        if case_insensitive:
            q = q.filter(Listing.location.icontains(query.location, autoescape=True))
        else:
            q = q.filter(_contains_exact_case(q, Listing.location, query.location))
    return q


def list_listings(db: Session, query: ListingQuery) -> list[Listing]:
    """Price range and location substring; insertion order."""
    skip, take = _page(query)
    q = db.query(Listing).options(selectinload(Listing.amenity_rows))
    q = _price_and_location(q, query, case_insensitive=False)
    return q.order_by(Listing.id.asc()).offset(skip).limit(take).all()


def filter_listings(db: Session, query: ListingQuery) -> list[Listing]:
    """Everything list_listings does plus category, amenities, capacity and sorting.

    Amenities must all be present on a listing for it to match. Default order is
    newest first.
    """
    skip, take = _page(query)
    sort_key = query.sort_by or "createdAt"
    column = SORT_FIELDS.get(sort_key)
    if column is None:
        raise ValidationError(f"Cannot sort by '{sort_key}'")
    order = (query.order or "desc").lower()
    if order not in ("asc", "desc"):
        raise ValidationError("order must be 'asc' or 'desc'")

    q = db.query(Listing).options(selectinload(Listing.amenity_rows))
    q = _price_and_location(q, query, case_insensitive=True)
    if query.category:
        q = q.filter(func.lower(Listing.category) == query.category.strip().lower())
    if query.guests is not None:
        q = q.filter(Listing.max_guests >= query.guests)
    for name in query.amenities:
        q = q.filter(Listing.amenity_rows.any(ListingAmenity.name == name))

    if order == "asc":
        q = q.order_by(column.asc(), Listing.id.asc())
    else:
        q = q.order_by(column.desc(), Listing.id.desc())
    return q.offset(skip).limit(take).all()


def _owned_listing(db: Session, listing_id: int, caller_id: int) -> Listing:
    listing = get_listing(db, listing_id)
    if listing.owner_id != caller_id:
        raise ForbiddenError("Not authorized")
    return listing


def update_listing(db: Session, listing_id: int, caller_id: int, data: ListingUpdate) -> Listing:
    listing = _owned_listing(db, listing_id, caller_id)
    changes = data.model_dump(exclude_unset=True)
    amenities = changes.pop("amenities", None)
    for field, value in changes.items():
        if value is None and field in _NON_NULLABLE:
            continue
        setattr(listing, field, value)
    if amenities is not None:
        listing.set_amenities(amenities)
    db.commit()
    db.refresh(listing)
    log.info("Host %s updated listing %s (%s)", caller_id, listing.id, ", ".join(sorted(data.model_fields_set)))
    return listing


def delete_listing(db: Session, listing_id: int, caller_id: int) -> dict:
    listing = _owned_listing(db, listing_id, caller_id)
    db.delete(listing)
    db.commit()
    log.info("Host %s deleted listing %s", caller_id, listing_id)
    return {"message": "Listing deleted successfully"}
