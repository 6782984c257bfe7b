"""Demo data: one host with one listing. Safe to run repeatedly."""
import logging

from sqlalchemy.orm import Session

from app.models.listing import Listing
from app.models.user import User, UserRole
from app.services.auth import get_password_hash

log = logging.getLogger(__name__)

DEMO_HOST_EMAIL = "host@test.com"
DEMO_HOST_PASSWORD = "password123"


def seed_demo_data(db: Session) -> User:
    host = db.query(User).filter(User.email == DEMO_HOST_EMAIL).first()
    if host is None:
        host = User(
            name="Test Host",
            email=DEMO_HOST_EMAIL,
            hashed_password=get_password_hash(DEMO_HOST_PASSWORD),
            role=UserRole.HOST,
        )
        db.add(host)
        db.flush()

    if db.query(Listing).filter(Listing.owner_id == host.id).count() == 0:
        listing = Listing(
            owner_id=host.id,
            title="Cozy Apartment in NYC",
            description="A nice apartment in Manhattan.",
            price_per_night=120,
            location="New York",
            photos=["photo1.jpg", "photo2.jpg"],
            category="apartment",
            max_guests=3,
        )
        listing.set_amenities(["wifi", "kitchen"])
        db.add(listing)
        log.info("Seeded demo listing for %s", DEMO_HOST_EMAIL)
    db.commit()
    db.refresh(host)
    return host
