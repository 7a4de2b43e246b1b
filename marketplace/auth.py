# marketplace/auth.py

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHashError


class CredentialHasher:
    """One-way salted hashing of passwords with Argon2."""

    def __init__(self, password_hasher: PasswordHasher = None):
        self._hasher = password_hasher or PasswordHasher()

    def hash(self, plaintext: str) -> str:
        return self._hasher.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        try:
            return self._hasher.verify(hashed, plaintext)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False
