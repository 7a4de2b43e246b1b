# marketplace/repositories/user_store.py

import logging
from typing import Dict, Optional, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from marketplace.exceptions import DuplicateIdentifierError
from marketplace.models.users import User

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    """Persistence boundary for user records."""

    def exists_by_email(self, email: str) -> bool: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def save(self, user: User) -> User: ...


class SqlAlchemyUserStore:
    """User store backed by the relational 'users' table."""

    def __init__(self, db: Session):
        self.db = db

    def exists_by_email(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def save(self, user: User) -> User:
        """
        Inserts or updates the user and commits.

        DuplicateIdentifierError is raised only when the email is held by a
        different row; every other IntegrityError propagates unchanged.
        """
        # Rollback expires the instance, so read what was being written first
        email, user_id = user.email, user.id
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            holder = self.db.query(User.id).filter(User.email == email).first()
            if holder is not None and holder.id != user_id:
                logger.warning(f"Unique constraint rejected user '{email}'")
                raise DuplicateIdentifierError(email) from e
            raise
        self.db.refresh(user)
        return user


class InMemoryUserStore:
    """Dict-backed user store keyed by email."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._next_id = 1

    def exists_by_email(self, email: str) -> bool:
        return email in self._users

    def find_by_email(self, email: str) -> Optional[User]:
        return self._users.get(email)

    def save(self, user: User) -> User:
        if user.id is None:
            if user.email in self._users:
                raise DuplicateIdentifierError(user.email)
            user.id = self._next_id
            self._next_id += 1
        self._users[user.email] = user
        return user

    def count(self) -> int:
        return len(self._users)
