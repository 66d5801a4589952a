"""
Authentication service orchestrator.

Coordinates sign-in, account registration, token verification and the
student self-service profile.

Dependencies: backend.boundary.db.CRUD, backend.boundary.identity, backend.core
System role: Identity use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.application.services.student_service import attendance_to_dict, student_to_dict
from backend.boundary.db.CRUD.attendance_crud import attendance_crud
from backend.boundary.db.CRUD.student_crud import student_crud
from backend.boundary.db.CRUD.user_crud import user_crud
from backend.boundary.db.models.user_model import UserModel
from backend.boundary.identity import PasswordHasher, TokenIssuer
from backend.configs import get_settings
from backend.configs.auth import AuthSettings
from backend.core.enums import UserRole
from backend.core.exceptions import (
    AuthenticationError,
    ConflictError,
    StudentNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from backend.core.validators import validate_email

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def user_to_dict(user: UserModel) -> dict[str, Any]:
    """Public profile; the password hash never leaves this layer."""
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "student_id": user.student_id,
        "created_at": user.created_at,
    }


def build_hasher(settings: AuthSettings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


def build_token_issuer(settings: AuthSettings) -> TokenIssuer:
    return TokenIssuer(
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        expire_minutes=settings.access_token_expire_minutes,
        issuer=settings.issuer,
    )


class AuthService:
    """
    Authentication service orchestrator.

    Attributes:
        db: Request-scoped async session
        settings: Auth settings (password policy)
        hasher: bcrypt password hasher
        tokens: JWT issuer/verifier
    """

    def __init__(
        self,
        db: AsyncSession,
        settings: AuthSettings | None = None,
        hasher: PasswordHasher | None = None,
        tokens: TokenIssuer | None = None,
    ) -> None:
        self.db = db
        self.settings = settings or get_settings().auth
        self.hasher = hasher or build_hasher(self.settings)
        self.tokens = tokens or build_token_issuer(self.settings)

    async def sign_in(self, email: str, password: str) -> dict:
        """
        Exchange credentials for a bearer token.

        Args:
            email: Login email (case-insensitive)
            password: Plain-text password

        Returns:
            dict: access_token, token_type, expires_at, user

        Raises:
            AuthenticationError: Unknown email or wrong password
        """
        user = await user_crud.get_by_email(self.db, email)
        if not user or not self.hasher.verify(password, user.password_hash):
            logger.warning("Sign-in rejected", extra={"email": email.strip().lower()})
            raise AuthenticationError(INVALID_CREDENTIALS)

        token, expires_at = self.tokens.issue(user.id, UserRole(user.role).value)
        logger.info("User signed in", extra={"user_id": str(user.id), "role": UserRole(user.role).value})
        return {
            "access_token": token,
            "token_type": "bearer",
            "expires_at": expires_at,
            "user": user_to_dict(user),
        }

    def sign_out(self, user_id: UUID) -> None:
        """Tokens are stateless; the client discards its token."""
        logger.info("User signed out", extra={"user_id": str(user_id)})

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.STUDENT,
        student_id: UUID | None = None,
    ) -> dict:
        """
        Create an account.

        Args:
            email: Login email, must be valid and unused
            password: Plain-text password (minimum length from settings)
            name: Display name
            role: admin or student
            student_id: Linked student record, required for students

        Returns:
            dict: Created user profile

        Raises:
            ValidationError: Invalid email, short password, missing name or student_id
            ConflictError: Email already has an account
            StudentNotFoundError: student_id does not exist
        """
        email = (email or "").strip().lower()
        name = (name or "").strip()
        role = UserRole(role)

        if not validate_email(email):
            raise ValidationError("Invalid email", field="email")
        if len(password or "") < self.settings.min_password_length:
            raise ValidationError(
                f"Password must be at least {self.settings.min_password_length} characters",
                field="password",
            )
        if not name:
            raise ValidationError("Name is required", field="name")

        if role is UserRole.STUDENT:
            if student_id is None:
                raise ValidationError("Student accounts require a student_id", field="student_id")
            if not await student_crud.exists(self.db, student_id):
                raise StudentNotFoundError(student_id)

        if await user_crud.get_by_email(self.db, email):
            raise ConflictError("Email already registered", details={"email": email})

        user = await user_crud.create(
            self.db,
            email=email,
            name=name,
            role=role,
            student_id=student_id if role is UserRole.STUDENT else None,
            password_hash=self.hasher.hash(password),
        )
        logger.info("User registered", extra={"user_id": str(user.id), "role": role.value})
        return user_to_dict(user)

    async def _get_user(self, user_id: UUID) -> UserModel:
        user = await user_crud.get_by_id(self.db, user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def get_user_data(self, user_id: UUID) -> dict:
        """
        Public profile of an account.

        Raises:
            UserNotFoundError: If the account does not exist
        """
        return user_to_dict(await self._get_user(user_id))

    async def is_admin(self, user_id: UUID) -> bool:
        user = await user_crud.get_by_id(self.db, user_id)
        return bool(user) and UserRole(user.role) is UserRole.ADMIN

    async def authenticate_token(self, token: str) -> dict:
        """
        Resolve a bearer token to the account it was issued for.

        Raises:
            AuthenticationError: Invalid or expired token, or account removed
        """
        claims = self.tokens.decode(token)
        try:
            user_id = UUID(claims["sub"])
        except ValueError as e:
            raise AuthenticationError("Invalid token") from e

        user = await user_crud.get_by_id(self.db, user_id)
        if not user:
            raise AuthenticationError("Account no longer exists")
        return user_to_dict(user)

    async def get_profile(self, user_id: UUID) -> dict:
        """
        Profile for the signed-in user.

        Students also get their own student record and check-ins.

        Returns:
            dict: user, student, attendances
        """
        user = await self._get_user(user_id)
        profile: dict[str, Any] = {
            "user": user_to_dict(user),
            "student": None,
            "attendances": [],
        }
        if UserRole(user.role) is UserRole.STUDENT and user.student_id:
            student = await student_crud.get_by_id(self.db, user.student_id)
            if student:
                profile["student"] = student_to_dict(student)
                attendances = await attendance_crud.get_for_student(self.db, student.id)
                profile["attendances"] = [attendance_to_dict(a) for a in attendances]
        return profile
