"""Listings published by hosts."""
from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Listing(Base):
    __tablename__ = "listings"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price_per_night = Column(Numeric(10, 2), nullable=False)
    location = Column(String(255), nullable=False, index=True)
    photos = Column(JSON, nullable=False, default=list)  # list of photo URLs/paths
    category = Column(String(100), nullable=False, default="")
    max_guests = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship("User", back_populates="listings")
    amenity_rows = relationship(
        "ListingAmenity",
        back_populates="listing",
        cascade="all, delete-orphan",
        order_by="ListingAmenity.id",
    )
    reservations = relationship("Reservation", back_populates="listing", cascade="all, delete-orphan")

    @property
    def amenities(self) -> list[str]:
        return [a.name for a in self.amenity_rows]

    def set_amenities(self, names) -> None:
        """Replace amenity tags; duplicates and blanks are dropped, first-seen order kept."""
        wanted = []
        for n in names or []:
            n = (n or "").strip()
            if n and n not in wanted:
                wanted.append(n)
        keep = [a for a in self.amenity_rows if a.name in wanted]
        have = {a.name for a in keep}
        self.amenity_rows = keep + [ListingAmenity(name=n) for n in wanted if n not in have]


class ListingAmenity(Base):
    """One amenity tag on a listing; kept in its own table so containment filters stay in SQL."""
    __tablename__ = "listing_amenities"
    __table_args__ = (UniqueConstraint("listing_id", "name", name="uq_listing_amenities_listing_name"),)

    id = Column(Integer, primary_key=True, index=True)
    listing_id = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)

    listing = relationship("Listing", back_populates="amenity_rows")
