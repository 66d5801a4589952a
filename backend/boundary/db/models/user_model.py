"""
User ORM model.

Login account for the admin panel and the student area.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Identity persistence
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_type
from backend.core.enums import UserRole


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        email: Login email, lowercased (unique)
        name: Display name
        role: admin or student
        student_id: Linked student record (students only)
        password_hash: bcrypt hash, never serialized

    Constraints:
        email: UNIQUE constraint; one account per email
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[UserRole] = mapped_column(
        enum_type(UserRole),
        nullable=False,
        default=UserRole.STUDENT,
    )

    student_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, default=None)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
