"""Identity component: password hashing, session tokens, signup and login."""
import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.errors import ConflictError, InvalidCredentialsError, NotFoundError, UnauthorizedError
from app.models.user import User, UserRole
from app.schemas.auth import AuthContext, UserCreate

log = logging.getLogger(__name__)


def _pwd_bytes(password: str, max_len: int = 72) -> bytes:
    return password.encode("utf-8")[:max_len]


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_pwd_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(_pwd_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def create_access_token(user_id: int, email: str) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    # PyJWT expects "sub" to be a string
    payload = {"sub": str(user_id), "email": email, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str | None) -> AuthContext:
    """Verify signature and expiry; no revocation list (logout is client-side)."""
    if not token or not isinstance(token, str) or not token.strip():
        raise UnauthorizedError("Not authenticated")
    settings = get_settings()
    try:
        payload = jwt.decode(
            token.strip(),
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired")
    except jwt.PyJWTError:
        raise UnauthorizedError("Invalid token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid token")
    return AuthContext(id=user_id, email=str(payload.get("email") or ""))


def signup(db: Session, data: UserCreate) -> tuple[str, User]:
    email = _normalize_email(data.email)
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")

    user = User(
        email=email,
        hashed_password=get_password_hash(data.password),
        name=data.name,
        role=data.role or UserRole.GUEST,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(user)
    log.info("User %s signed up as %s", user.id, user.role.value)
    return create_access_token(user.id, user.email), user


def login(db: Session, email: str, password: str) -> tuple[str, User]:
    user = db.query(User).filter(User.email == _normalize_email(email)).first()
    if not user or not verify_password(password, user.hashed_password):
        log.info("Failed login for %s", _normalize_email(email))
        raise InvalidCredentialsError()
    return create_access_token(user.id, user.email), user


def get_me(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user
