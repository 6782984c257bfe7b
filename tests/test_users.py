from datetime import datetime, timedelta, timezone

import jwt

from app.config import get_settings
from app.services.auth import create_access_token, decode_token, get_password_hash, verify_password
from conftest import auth, signup


def test_signup_returns_token_and_user_without_password(client):
    body = signup(client, "alice@example.com", name="Alice")
    assert body["token"]
    user = body["user"]
    assert user["email"] == "alice@example.com"
    assert user["name"] == "Alice"
    assert "password" not in user
    assert "hashedPassword" not in user


def test_signup_defaults_role_to_guest(client):
    assert signup(client, "alice@example.com")["user"]["role"] == "GUEST"


def test_signup_as_host(client):
    assert signup(client, "hugo@example.com", role="HOST")["user"]["role"] == "HOST"


def test_signup_duplicate_email_conflicts(client):
    signup(client, "alice@example.com")
    r = client.post("/users/signup", json={"email": "Alice@Example.com", "password": "another1", "name": "A2"})
    assert r.status_code == 400
    assert r.json() == {"error": "Email already registered"}


def test_signup_rejects_bad_input(client):
    r = client.post("/users/signup", json={"email": "not-an-email", "password": "secret123", "name": "X"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request"

    r = client.post("/users/signup", json={"email": "x@example.com", "password": "123", "name": "X"})
    assert r.status_code == 400

    r = client.post("/users/signup", json={"email": "x@example.com", "password": "secret123", "name": "X", "role": "ADMIN"})
    assert r.status_code == 400


def test_password_is_stored_hashed(db_session, client):
    from app.models.user import User

    signup(client, "alice@example.com", password="secret123")
    stored = db_session.query(User).filter(User.email == "alice@example.com").one()
    assert stored.hashed_password != "secret123"
    assert verify_password("secret123", stored.hashed_password)


def test_login_success(client):
    signup(client, "alice@example.com", password="secret123")
    r = client.post("/users/login", json={"email": "alice@example.com", "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["token"]
    assert r.json()["user"]["email"] == "alice@example.com"


def test_login_failures_do_not_reveal_which_part_was_wrong(client):
    signup(client, "alice@example.com", password="secret123")
    wrong_pw = client.post("/users/login", json={"email": "alice@example.com", "password": "nope123"})
    unknown = client.post("/users/login", json={"email": "bob@example.com", "password": "secret123"})
    assert wrong_pw.status_code == unknown.status_code == 401
    assert wrong_pw.json() == unknown.json() == {"error": "Invalid credentials"}


def test_me_requires_token(client):
    r = client.get("/users/me")
    assert r.status_code == 401


def test_me_returns_caller(client):
    body = signup(client, "alice@example.com", name="Alice")
    r = client.get("/users/me", headers=auth(body["token"]))
    assert r.status_code == 200
    assert r.json()["id"] == body["user"]["id"]
    assert r.json()["name"] == "Alice"


def test_me_rejects_garbage_token(client):
    r = client.get("/users/me", headers=auth("not.a.jwt"))
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid token"}


def test_me_rejects_token_signed_with_other_secret(client):
    body = signup(client, "alice@example.com")
    forged = jwt.encode(
        {"sub": str(body["user"]["id"]), "email": "alice@example.com",
         "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "some-other-secret",
        algorithm="HS256",
    )
    assert client.get("/users/me", headers=auth(forged)).status_code == 401


def test_me_rejects_expired_token(client):
    body = signup(client, "alice@example.com")
    settings = get_settings()
    expired = jwt.encode(
        {"sub": str(body["user"]["id"]), "email": "alice@example.com",
         "exp": datetime.now(timezone.utc) - timedelta(seconds=5)},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    r = client.get("/users/me", headers=auth(expired))
    assert r.status_code == 401
    assert r.json() == {"error": "Token expired"}


def test_me_for_deleted_account_is_not_found(client):
    token = create_access_token(9999, "ghost@example.com")
    assert client.get("/users/me", headers=auth(token)).status_code == 404


def test_token_round_trip_and_seven_day_expiry():
    token = create_access_token(7, "a@example.com")
    ctx = decode_token(token)
    assert (ctx.id, ctx.email) == (7, "a@example.com")

    settings = get_settings()
    payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    lifetime = payload["exp"] - datetime.now(timezone.utc).timestamp()
    assert timedelta(days=7) - timedelta(minutes=1) < timedelta(seconds=lifetime) <= timedelta(days=7)


def test_verify_password_handles_non_bcrypt_hash():
    assert verify_password("x", "plaintext") is False
    assert verify_password("right", get_password_hash("right")) is True
