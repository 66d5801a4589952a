"""
Password hashing.

bcrypt wrapper used when accounts are created and when credentials are
checked at sign-in.

Dependencies: bcrypt
System role: Credential storage for the identity boundary
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    bcrypt password hasher.

    Attributes:
        rounds: bcrypt cost factor used for new hashes
    """

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a plain-text password.

        Args:
            password: Plain-text password

        Returns:
            str: bcrypt hash (salt included)
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a plain-text password against a stored hash.

        Malformed hashes count as a mismatch.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError as e:
            logger.warning("Stored password hash is malformed", extra={"error": str(e)})
            return False
