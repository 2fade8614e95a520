"""
Credential handling.

Passwords are stored verbatim by default so existing records keep working.
``BcryptHasher`` is available for deployments that want real hashing; pick
one with the PASSWORD_HASHER setting.
"""

import hmac
from abc import ABC, abstractmethod

from passlib.context import CryptContext


class PasswordHasher(ABC):
    """Turns a plain password into its stored form and checks it later."""

    name = ""

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, plain_password: str, stored_password: str) -> bool:
        pass


class PlaintextHasher(PasswordHasher):
    """Stores and compares passwords verbatim. Not secure."""

    name = "plaintext"

    def hash(self, password: str) -> str:
        return password

    def verify(self, plain_password: str, stored_password: str) -> bool:
        if plain_password is None or stored_password is None:
            return False
        return hmac.compare_digest(
            str(plain_password).encode("utf-8"), str(stored_password).encode("utf-8")
        )


class BcryptHasher(PasswordHasher):
    """Hashes passwords with bcrypt via passlib."""

    name = "bcrypt"

    def __init__(self) -> None:
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password to hash

        Returns:
            Hashed password string
        """
        return self.pwd_context.hash(password)

    def verify(self, plain_password: str, stored_password: str) -> bool:
        """Verify a password against its bcrypt hash.

        A stored value that is not a recognizable hash never matches.
        """
        if not plain_password or not stored_password:
            return False
        try:
            return self.pwd_context.verify(plain_password, stored_password)
        except ValueError:
            return False


def get_password_hasher(name: str) -> PasswordHasher:
    """Return the hasher registered under ``name``."""
    if name == BcryptHasher.name:
        return BcryptHasher()
    if name == PlaintextHasher.name:
        return PlaintextHasher()
    raise ValueError(f"Unknown password hasher '{name}'")
