# marketplace/services/registration.py

import logging

from marketplace.auth import CredentialHasher
from marketplace.config import Settings
from marketplace.exceptions import DuplicateIdentifierError
from marketplace.mappers import from_registration_request
from marketplace.models.users import UserRole
from marketplace.repositories.user_store import UserStore
from marketplace.schemas.user_schemas import Register

logger = logging.getLogger(__name__)


class RegistrationService:
    """
    Creates user accounts.

    A duplicate identifier is an expected outcome and is reported as False.
    Errors from the store or the hasher propagate to the caller.
    """

    def __init__(self, user_store: UserStore, hasher: CredentialHasher, settings: Settings):
        self.user_store = user_store
        self.hasher = hasher
        self.settings = settings

    def register(self, request: Register) -> bool:
        email = request.username
        logger.info(f"Registration started for user: {email}")

        if self.user_store.exists_by_email(email):
            logger.warning(f"Registration rejected, email already in use: {email}")
            return False

        role = self._determine_role(email, request.role)
        user = from_registration_request(request, role)
        user.hashed_password = self.hasher.hash(request.password)
        user.enabled = True

        try:
            self.user_store.save(user)
        except DuplicateIdentifierError:
            logger.warning(f"Registration rejected by the store, email already in use: {email}")
            return False

        logger.info(f"User registered successfully: {email} with role {role.value}")
        return True

    def _determine_role(self, email: str, requested_role) -> UserRole:
        if requested_role is None or requested_role == UserRole.USER:
            return UserRole.USER

        if not self.settings.ADMIN_REGISTRATION_ENABLED:
            logger.warning(f"Admin registration is disabled; {email} downgraded to USER")
            return UserRole.USER
        if not self.settings.is_email_in_whitelist(email):
            logger.warning(f"ADMIN requested by non-whitelisted email {email}; downgraded to USER")
            return UserRole.USER

        logger.info(f"ADMIN registration approved for {email}")
        return UserRole.ADMIN
