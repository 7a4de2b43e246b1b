# marketplace/services/auth_service.py

import logging

from marketplace.auth import CredentialHasher
from marketplace.repositories.user_store import UserStore

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, user_store: UserStore, hasher: CredentialHasher):
        self.user_store = user_store
        self.hasher = hasher

    def login(self, username: str, password: str) -> bool:
        """Checks credentials. Only an existing, enabled user with a matching password passes."""
        logger.debug(f"Checking credentials for user: {username}")
        user = self.user_store.find_by_email(username)
        if user is None:
            logger.warning(f"Login failed, unknown user: {username}")
            return False
        if not user.enabled:
            logger.warning(f"Login failed, user is disabled: {username}")
            return False
        if not self.hasher.verify(password, user.hashed_password):
            logger.warning(f"Login failed, bad credentials for user: {username}")
            return False

        logger.debug(f"Login succeeded for user: {username}")
        return True
