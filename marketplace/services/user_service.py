# marketplace/services/user_service.py

import logging

from sqlalchemy.orm import Session

from marketplace.auth import CredentialHasher
from marketplace.exceptions import InvalidPasswordError, UserNotFoundError
from marketplace.mappers import apply_user_update, to_response
from marketplace.models.users import User
from marketplace.repositories.user_store import SqlAlchemyUserStore
from marketplace.schemas.user_schemas import NewPassword, UpdateUser, UserView
from marketplace.services.image_service import ImageService

logger = logging.getLogger(__name__)


class UserService:
    """Profile operations for the authenticated user, identified by email."""

    def __init__(self, db: Session, hasher: CredentialHasher, images: ImageService = None):
        self.db = db
        self.user_store = SqlAlchemyUserStore(db)
        self.hasher = hasher
        self.images = images or ImageService()

    def _get_user(self, email: str) -> User:
        user = self.user_store.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        return user

    def get_current_user(self, email: str) -> UserView:
        logger.debug(f"Fetching profile for user: {email}")
        return to_response(self._get_user(email))

    def update_user(self, email: str, update: UpdateUser) -> UpdateUser:
        logger.debug(f"Updating profile for user: {email}")
        user = self._get_user(email)
        apply_user_update(update, user)
        self.user_store.save(user)
        logger.info(f"Profile for user {email} updated successfully")
        return update

    def update_password(self, email: str, new_password: NewPassword) -> None:
        logger.debug(f"Changing password for user: {email}")
        user = self._get_user(email)
        if not self.hasher.verify(new_password.current_password, user.hashed_password):
            logger.warning(f"Wrong current password for user: {email}")
            raise InvalidPasswordError()

        user.hashed_password = self.hasher.hash(new_password.new_password)
        self.user_store.save(user)
        logger.info(f"Password for user {email} changed successfully")

    def update_user_image(self, email: str, content: bytes, content_type: str) -> UserView:
        """Stores a new avatar and drops the previous image row and file."""
        user = self._get_user(email)
        old_image = user.image
        old_path = old_image.file_path if old_image is not None else None

        new_image = self.images.upload_avatar(content, content_type)
        new_path = new_image.file_path
        user.image = new_image
        if old_image is not None:
            self.db.delete(old_image)
        try:
            self.user_store.save(user)
        except Exception:
            self.images.remove_file(new_path)
            raise

        if old_path:
            self.images.remove_file(old_path)
        logger.info(f"Avatar for user {email} set to {new_path}")
        return to_response(user)
