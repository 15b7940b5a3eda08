from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, status, HTTPException, Request
from fastapi.security import OAuth2PasswordRequestForm

from app.config import settings
from app.dependencies import db_dependency
from app.limits import limiter
from app.models.user import User
from app.schemas.user import UserCreate, UserResponse, Token
from app.services.auth_service import (
    authenticate_user,
    create_access_token,
    get_password_hash,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(db: db_dependency, user_request: UserCreate):
    if db.query(User).filter(User.email == user_request.email).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is already registered",
        )
    user_model = User(
        name=user_request.name,
        email=user_request.email,
        password_hash=get_password_hash(user_request.password),
    )
    db.add(user_model)
    db.commit()
    db.refresh(user_model)
    return user_model


@router.post("/login", response_model=Token)
@limiter.limit("5/minute")
def login_for_access_token(
    request: Request,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: db_dependency,
):
    user = authenticate_user(form_data.username, form_data.password, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not authenticate user",
        )
    token = create_access_token(
        user.email,
        user.id,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return {"access_token": token, "token_type": "bearer"}
