"""
Identity boundary: password hashing and access tokens.

Exports:
  - PasswordHasher: bcrypt hashing and verification
  - TokenIssuer: JWT issuing and verification
"""

from backend.boundary.identity.password_hasher import PasswordHasher
from backend.boundary.identity.token_issuer import TokenIssuer

__all__ = ["PasswordHasher", "TokenIssuer"]
