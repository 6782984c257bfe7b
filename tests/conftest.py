import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.database import Database
from app.main import create_app

# ---------- TEST FIXTURES ----------

# Use in-memory SQLite for test isolation
TEST_DATABASE_URL = "sqlite://"


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    # Minimum bcrypt cost keeps the suite quick
    monkeypatch.setattr(get_settings(), "bcrypt_rounds", 4)


@pytest.fixture
def database():
    database = Database(TEST_DATABASE_URL)
    database.create_all()
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def client(database):
    app = create_app(database=database)
    yield TestClient(app)


# ---------- TEST DATA HELPERS ----------

def signup(client, email, role=None, name="Test User", password="secret123"):
    body = {"email": email, "password": password, "name": name}
    if role:
        body["role"] = role
    r = client.post("/users/signup", json=body)
    assert r.status_code == 200, r.text
    return r.json()


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def listing_dict(**overrides):
    data = {
        "title": "Cozy Apartment",
        "description": "A nice apartment.",
        "pricePerNight": 120,
        "location": "New York",
        "photos": ["photo1.jpg"],
        "amenities": ["wifi", "kitchen"],
        "category": "apartment",
        "maxGuests": 3,
    }
    data.update(overrides)
    return data


@pytest.fixture
def host(client):
    return signup(client, "host@example.com", role="HOST", name="Hannah Host")


@pytest.fixture
def guest(client):
    return signup(client, "guest@example.com", role="GUEST", name="Gary Guest")


@pytest.fixture
def other_guest(client):
    return signup(client, "guest2@example.com", role="GUEST", name="Gina Guest")


@pytest.fixture
def make_listing(client, host):
    def _make(token=None, **overrides):
        r = client.post("/listings", json=listing_dict(**overrides), headers=auth(token or host["token"]))
        assert r.status_code == 200, r.text
        return r.json()
    return _make


@pytest.fixture
def listing(make_listing):
    return make_listing()
