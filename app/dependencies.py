"""Shared dependencies: DB session, current caller."""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.schemas.auth import AuthContext
from app.services.auth import decode_token

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthContext:
    """Authenticated caller identity; raises UnauthorizedError (401) otherwise."""
    return decode_token(credentials.credentials if credentials else None)
