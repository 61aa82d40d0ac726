# File: app/services/auth_service.py

"""
Authentication service.

Looks users up by email, verifies the password hash and issues the signed
access tokens used by both the JSON API and the server-rendered pages.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.security import create_access_token
from app.models.user import User
from app.schemas.auth import Token
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


def authenticate_user(
    db: Session,
    *,
    email: str,
    password: str,
) -> Optional[User]:
    """
    Return the user for valid credentials, None otherwise.
    """
    user = UserService(db).authenticate(email, password)
    if user is None:
        logger.info("Failed login attempt for %s", email)
    return user


def issue_token(user: User) -> Token:
    return Token(access_token=create_access_token(user.customer_id))
