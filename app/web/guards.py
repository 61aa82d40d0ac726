# File: app/web/guards.py

"""
Route guards for the server-rendered pages.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.responses import RedirectResponse

from app.api.deps import get_optional_user
from app.models.user import User


class RedirectRequired(Exception):
    def __init__(self, location: str):
        self.location = location


def guest_only(user: Optional[User] = Depends(get_optional_user)) -> None:
    """
    Pages for anonymous visitors only (login). Signed-in users go home.
    """
    if user is not None:
        raise RedirectRequired("/")


async def redirect_handler(request: Request, exc: RedirectRequired) -> RedirectResponse:
    return RedirectResponse(exc.location, status_code=303)
