"""Role checkpoints. Every gate compares UserRole members, never raw strings."""
from sqlalchemy.orm import Session

from app.errors import ForbiddenError
from app.models.user import User, UserRole

# Which roles may perform each gated action. Adding a role means deciding it here.
_ALLOWED = {
    "create_listing": {UserRole.HOST},
    "book": {UserRole.GUEST},
}


def require_role(db: Session, user_id: int, action: str, message: str) -> User:
    """Load the caller and check that their role may perform action; ForbiddenError otherwise."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None or user.role not in _ALLOWED[action]:
        raise ForbiddenError(message)
    return user
