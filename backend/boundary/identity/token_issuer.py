"""
Access token issuing and verification.

Signed JWT bearer tokens carrying the user id and role.

Dependencies: python-jose
System role: Session tokens for the identity boundary
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from backend.core.exceptions import AuthenticationError


class TokenIssuer:
    """
    JWT issuer/verifier.

    Attributes:
        secret_key: HMAC signing secret
        algorithm: JWT algorithm (HS256 by default)
        expire_minutes: Token lifetime
        issuer: Value of the "iss" claim
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 720,
        issuer: str = "academy-manager",
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.issuer = issuer

    def issue(self, user_id: UUID, role: str, now: datetime | None = None) -> tuple[str, datetime]:
        """
        Create a signed access token.

        Args:
            user_id: Subject of the token
            role: User role, copied into the "role" claim
            now: Issue time (current UTC time when None)

        Returns:
            tuple: (encoded token, expiry timestamp)
        """
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(minutes=self.expire_minutes)
        claims = {
            "sub": str(user_id),
            "role": role,
            "iss": self.issuer,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        return token, expires_at

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify a token and return its claims.

        Raises:
            AuthenticationError: If the token is expired, tampered or malformed
        """
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
            )
        except ExpiredSignatureError as e:
            raise AuthenticationError("Token expired") from e
        except JWTError as e:
            raise AuthenticationError("Invalid token", details={"error": str(e)}) from e

        if "sub" not in claims:
            raise AuthenticationError("Invalid token", details={"error": "missing subject"})
        return claims
