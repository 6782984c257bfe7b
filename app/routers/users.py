"""Signup, login and current-user lookup."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.schemas.auth import AuthContext, AuthResponse, UserCreate, UserLogin, UserResponse
from app.services import auth as auth_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/signup", response_model=AuthResponse)
def signup(data: UserCreate, db: Session = Depends(get_db)):
    token, user = auth_service.signup(db, data)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(data: UserLogin, db: Session = Depends(get_db)):
    token, user = auth_service.login(db, data.email, data.password)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
def me(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    return UserResponse.model_validate(auth_service.get_me(db, current_user.id))
