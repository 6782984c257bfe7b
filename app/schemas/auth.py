"""Identity schemas: signup, login, session token."""
from datetime import datetime
from pydantic import EmailStr, field_validator
from app.models.user import UserRole
from app.schemas.common import CamelModel

PASSWORD_MIN_LENGTH = 6


class UserCreate(CamelModel):
    email: EmailStr
    password: str
    name: str
    role: UserRole | None = None  # GUEST when omitted

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, v: str) -> str:
        if len(v or "") < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters.")
        return v

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Name is required.")
        return v


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class UserResponse(CamelModel):
    id: int
    email: str
    name: str
    role: UserRole
    created_at: datetime | None = None


class AuthResponse(CamelModel):
    token: str
    user: UserResponse


class AuthContext(CamelModel):
    """Caller identity carried by a verified session token."""
    id: int
    email: str
