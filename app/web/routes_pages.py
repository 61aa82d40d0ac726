# File: app/web/routes_pages.py

"""
Server-rendered pages: home, login, logout.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_optional_user
from app.core.config import settings
from app.models.user import User
from app.schemas.auth import LoginRequest
from app.services.auth_service import authenticate_user, issue_token
from app.web.guards import guest_only
from app.web.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
def home(request: Request, user: Optional[User] = Depends(get_optional_user)):
    return templates.TemplateResponse(request, "home.html", {"user": user})


@router.get("/login", response_class=HTMLResponse, dependencies=[Depends(guest_only)])
def login_page(request: Request):
    return templates.TemplateResponse(request, "login.html", {"error": None, "email": ""})


@router.post("/login", response_class=HTMLResponse, dependencies=[Depends(guest_only)])
def login_submit(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    try:
        credentials = LoginRequest(email=email.strip(), password=password)
    except ValidationError:
        credentials = None

    user = None
    if credentials is not None:
        user = authenticate_user(db, email=credentials.email, password=credentials.password)
    if user is None:
        return templates.TemplateResponse(
            request,
            "login.html",
            {"error": "Invalid email or password.", "email": email},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    token = issue_token(user)
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.access_token_cookie,
        token.access_token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=request.url.scheme == "https",
    )
    logger.info("User %s signed in", user.customer_id)
    return response


@router.post("/logout")
def logout():
    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.access_token_cookie)
    return response
