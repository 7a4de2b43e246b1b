# marketplace/main.py

import logging
from sqlalchemy.orm import Session

# --- Local Imports ---
from marketplace.logging_config import setup_logging
from marketplace.config import settings
from marketplace.auth import CredentialHasher
from marketplace.database import Base, engine
from marketplace.repositories.user_store import SqlAlchemyUserStore
from marketplace.services.registration import RegistrationService
from marketplace.services.auth_service import AuthService
from marketplace.services.user_service import UserService
from marketplace.services.ad_service import AdService
from marketplace.services.comment_service import CommentService
from marketplace.services.image_service import ImageService

# Register every model on Base.metadata before create_all
import marketplace.models.images  # noqa: F401
import marketplace.models.users  # noqa: F401
import marketplace.models.ads  # noqa: F401
import marketplace.models.comments  # noqa: F401

logger = logging.getLogger(__name__)

hasher = CredentialHasher()


def init_app(bind=None, configure_logging=True):
    """Sets up logging and creates the database tables if they don't exist."""
    if configure_logging:
        setup_logging()
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info(f"Database tables ready on {bind.url.render_as_string(hide_password=True)}")


# --- Service factories, one set per DB session ---

def get_registration_service(db: Session) -> RegistrationService:
    return RegistrationService(SqlAlchemyUserStore(db), hasher, settings)


def get_auth_service(db: Session) -> AuthService:
    return AuthService(SqlAlchemyUserStore(db), hasher)


def get_user_service(db: Session) -> UserService:
    return UserService(db, hasher, get_image_service())


def get_ad_service(db: Session) -> AdService:
    return AdService(db, get_image_service())


def get_comment_service(db: Session) -> CommentService:
    return CommentService(db)


def get_image_service() -> ImageService:
    return ImageService(settings.UPLOAD_DIR)
