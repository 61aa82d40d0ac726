# File: app/api/deps.py

from collections.abc import Generator
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import decode_access_token
from app.db.session import SessionLocal
from app.models.user import User
from app.services.upload_service import UploadService
from app.services.user_service import UserService

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api_v1_prefix}/auth/login",
    auto_error=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_upload_service() -> UploadService:
    return UploadService(settings.media_root)


def get_user_service(
    db: Session = Depends(get_db),
    uploads: UploadService = Depends(get_upload_service),
) -> UserService:
    return UserService(db, uploads)


def get_optional_user(
    request: Request,
    bearer: Optional[str] = Depends(oauth2_scheme),
    users: UserService = Depends(get_user_service),
) -> Optional[User]:
    """
    Resolve the signed-in user from a bearer token or the access-token
    cookie set by the login page. Returns None for anonymous visitors.
    """
    token = bearer or request.cookies.get(settings.access_token_cookie)
    if not token:
        return None
    customer_id = decode_access_token(token)
    if customer_id is None:
        return None
    return users.find_by_customer_id(customer_id)


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
