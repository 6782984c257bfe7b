"""Listing directory endpoints. Browsing is public; writes need a host or the owner."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.schemas.auth import AuthContext
from app.schemas.common import MessageResponse
from app.schemas.listing import ListingCreate, ListingQuery, ListingResponse, ListingUpdate
from app.services import listings as listing_service

router = APIRouter(prefix="/listings", tags=["listings"])


@router.post("", response_model=ListingResponse)
def create_listing(
    data: ListingCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    listing = listing_service.create_listing(db, data, current_user.id)
    return ListingResponse.model_validate(listing)


@router.get("", response_model=list[ListingResponse])
def list_listings(
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    location: str | None = Query(None, description="Substring of the listing location"),
    skip: int = Query(0, ge=0),
    take: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    query = ListingQuery(min_price=min_price, max_price=max_price, location=location, skip=skip, take=take)
    return [ListingResponse.model_validate(l) for l in listing_service.list_listings(db, query)]


@router.get("/filter", response_model=list[ListingResponse])
def filter_listings(
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    location: str | None = Query(None),
    category: str | None = Query(None),
    amenities: str | None = Query(None, description="Comma-separated, e.g. wifi,kitchen"),
    guests: int | None = Query(None, ge=1, description="Minimum guest capacity"),
    sort_by: str | None = Query(None, alias="sortBy"),
    order: str | None = Query(None, description="asc or desc"),
    skip: int = Query(0, ge=0),
    take: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    query = ListingQuery(
        min_price=min_price,
        max_price=max_price,
        location=location,
        category=category,
        amenities=ListingQuery.split_amenities(amenities),
        guests=guests,
        sort_by=sort_by,
        order=order,
        skip=skip,
        take=take,
    )
    return [ListingResponse.model_validate(l) for l in listing_service.filter_listings(db, query)]


@router.get("/{listing_id}", response_model=ListingResponse)
def get_listing(listing_id: int, db: Session = Depends(get_db)):
    return ListingResponse.model_validate(listing_service.get_listing(db, listing_id))


@router.put("/{listing_id}", response_model=ListingResponse)
def update_listing(
    listing_id: int,
    data: ListingUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    listing = listing_service.update_listing(db, listing_id, current_user.id, data)
    return ListingResponse.model_validate(listing)


@router.delete("/{listing_id}", response_model=MessageResponse)
def delete_listing(
    listing_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return listing_service.delete_listing(db, listing_id, current_user.id)
