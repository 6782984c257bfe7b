"""Standalone script to create DB tables and seed the demo host and listing.

Run from project root:
  python scripts/seed_demo.py
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.config import get_settings
from app.database import Database
from app.seed import DEMO_HOST_EMAIL, DEMO_HOST_PASSWORD, seed_demo_data

if __name__ == "__main__":
    database = Database(get_settings().database_url)
    database.create_all()
    db = database.session()
    try:
        seed_demo_data(db)
        print(f"Demo data seeded. Host login: {DEMO_HOST_EMAIL} / {DEMO_HOST_PASSWORD}")
    finally:
        db.close()
        database.dispose()
