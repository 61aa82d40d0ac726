# app/services/user_service.py
"""
User management on top of a SQLAlchemy session.

Lookups return ``None`` when nothing matches. Write operations run inside
the session's transaction and roll it back on failure.
"""

import logging
from typing import Optional

from fastapi import UploadFile
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import UserDeletionError, field_error
from app.core.security import make_hash, verify_hash
from app.models.user import User
from app.schemas.user import PasswordUpdate, ProfileBasicInfoUpdate, UserCreate
from app.services.upload_service import UploadService

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session, uploads: Optional[UploadService] = None):
        self.db = db
        self.uploads = uploads or UploadService()

    # -----------------------------
    # LOOKUPS
    # -----------------------------
    def find_by_customer_id(self, customer_id: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.customer_id == customer_id)).first()

    def find_by_email(self, email: str, session: Optional[Session] = None) -> Optional[User]:
        """
        Look a user up by email, optionally inside a caller-supplied session
        so the read joins that session's transaction.
        """
        return (session or self.db).scalars(select(User).where(User.email == email)).first()

    def get_users(self) -> list[User]:
        return list(self.db.scalars(select(User).order_by(User.id)))

    # -----------------------------
    # REGISTRATION / LOGIN
    # -----------------------------
    def create_user(self, data: UserCreate) -> User:
        if self.find_by_email(data.email) is not None:
            raise field_error("email", "Email already exists", data.email)

        user = User(
            name=data.name,
            email=data.email,
            phone=data.phone,
            password=make_hash(data.password),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        logger.info("Created user %s", user.customer_id)
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.find_by_email(email)
        if user is None or not verify_hash(password, user.password):
            return None
        return user

    # -----------------------------
    # PROFILE
    # -----------------------------
    def update_profile_basic_info(
        self,
        data: ProfileBasicInfoUpdate,
        avatar: Optional[UploadFile] = None,
    ) -> bool:
        """
        Update name/email/phone and optionally replace the avatar.

        Raises ``ValidationError`` when the user does not exist or the new
        email belongs to someone else; nothing is written in either case.
        ``UploadError`` propagates when the avatar is not a usable image.
        """
        tx = self.db
        uploaded_path: Optional[str] = None
        try:
            user = tx.scalars(select(User).where(User.customer_id == data.customer_id)).first()
            if user is None:
                raise field_error("customer_id", "User not found", data.customer_id)

            if user.email != data.email:
                existing = self.find_by_email(data.email, tx)
                if existing is not None and existing.customer_id != user.customer_id:
                    raise field_error("email", "Email already exists", data.email)

            values = data.model_dump(exclude={"customer_id"}, exclude_unset=True)
            previous_avatar = user.avatar

            if avatar is not None:
                uploaded = self.uploads.upload_image(
                    avatar,
                    width=settings.avatar_width,
                    height=settings.avatar_height,
                    quality=settings.avatar_quality,
                    directory=settings.avatar_directory,
                )
                uploaded_path = uploaded.path if uploaded else None
                values["avatar"] = uploaded_path

            for field, value in values.items():
                setattr(user, field, value)
            tx.commit()
        except Exception:
            tx.rollback()
            if uploaded_path:
                self.uploads.delete_file(uploaded_path)
            raise

        # Only drop the old file once the new path is committed
        if avatar is not None and previous_avatar and self.uploads.file_exists(previous_avatar):
            self.uploads.delete_file(previous_avatar)

        logger.info("Updated profile for user %s", data.customer_id)
        return True

    def update_password(self, customer_id: str, data: PasswordUpdate) -> bool | str:
        """
        Returns True on success, False when the user is missing or the write
        fails, or the stringified ValidationError for a rejected password.
        """
        try:
            user = self.find_by_customer_id(customer_id)
            if user is None:
                return False

            if not verify_hash(data.current_password, user.password):
                return str(field_error("current_password", "Current password is incorrect"))

            if data.new_password != data.confirm_password:
                return str(
                    field_error(
                        "confirm_password",
                        "New password and confirm password do not match",
                    )
                )

            user.password = make_hash(data.new_password)
            self.db.commit()
            return True
        except Exception:
            self.db.rollback()
            logger.exception("Error updating password for user %s", customer_id)
            return False

    # -----------------------------
    # DELETION
    # -----------------------------
    def delete_user(self, user_id: int) -> None:
        try:
            self.db.execute(delete(User).where(User.id == user_id))
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error("Error deleting user %s: %s", user_id, e)
            raise UserDeletionError("Failed to delete user.") from e

