"""
User CRUD operations.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Identity persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.user_model import UserModel


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    default_order = "email"

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """
        Retrieve account by login email (case-insensitive).

        Args:
            session: Async database session
            email: Login email

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


user_crud = UserCRUD()
