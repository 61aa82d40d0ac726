# File: app/api/v1/routes_auth.py

"""
Auth API routes: registration and token login.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_user_service
from app.schemas.auth import LoginRequest, Token
from app.schemas.user import UserCreate, UserRead
from app.services.auth_service import authenticate_user, issue_token
from app.services.user_service import UserService

router = APIRouter()


@router.post("/login", response_model=Token, summary="User login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange email + password for a bearer token.
    """
    user = authenticate_user(db, email=payload.email, password=payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return issue_token(user)


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="User registration",
)
def register(payload: UserCreate, users: UserService = Depends(get_user_service)):
    try:
        return users.create_user(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=jsonable_encoder(e.errors(include_url=False, include_context=False)),
        )
