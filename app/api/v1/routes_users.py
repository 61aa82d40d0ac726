# File: app/api/v1/routes_users.py

"""
User management endpoints.

Every route requires a signed-in user (bearer token or login cookie).
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from app.api.deps import get_current_user, get_user_service
from app.core.exceptions import UploadError, UserDeletionError
from app.models.user import User
from app.schemas.user import PasswordUpdate, ProfileBasicInfoUpdate, UserRead
from app.services.user_service import UserService

router = APIRouter(dependencies=[Depends(get_current_user)])


def _validation_failed(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=jsonable_encoder(e.errors(include_url=False, include_context=False)),
    )


@router.get("/", response_model=list[UserRead], summary="List users")
def list_users(users: UserService = Depends(get_user_service)):
    return users.get_users()


@router.get("/me", response_model=UserRead, summary="Current user")
def read_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/me/profile", response_model=UserRead, summary="Update profile basic info")
def update_profile(
    name: str = Form(...),
    email: str = Form(...),
    phone: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    """
    Multipart form update. Sending ``avatar`` replaces the stored image.
    """
    fields = {"customer_id": current_user.customer_id, "name": name, "email": email}
    # An omitted phone field leaves the stored number alone
    if phone is not None:
        fields["phone"] = phone

    try:
        data = ProfileBasicInfoUpdate(**fields)
    except ValidationError as e:
        raise _validation_failed(e)

    # Browsers send an empty part when the file input is left blank
    if avatar is not None and not avatar.filename:
        avatar = None

    try:
        users.update_profile_basic_info(data, avatar)
    except ValidationError as e:
        raise _validation_failed(e)
    except UploadError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[{"type": "custom", "loc": [e.field], "msg": e.message}],
        )

    return users.find_by_customer_id(current_user.customer_id)


@router.put("/me/password", summary="Change password")
def update_password(
    payload: PasswordUpdate,
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    result = users.update_password(current_user.customer_id, payload)
    if isinstance(result, str):
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=result)
    if not result:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return {"updated": True}


@router.get("/{customer_id}", response_model=UserRead, summary="Get user by customer id")
def read_user(customer_id: str, users: UserService = Depends(get_user_service)):
    user = users.find_by_customer_id(customer_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return user


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user by internal id",
)
def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    """
    Users may only delete their own account.
    """
    if current_user.id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to delete this user.")
    try:
        users.delete_user(user_id)
    except UserDeletionError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
