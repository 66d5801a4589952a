"""
Video ORM model.

Technique library entry, tagged with the belt level it targets.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Video library persistence
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, TimestampMixin, UUIDMixin, enum_type
from backend.core.enums import BeltLevel


class VideoModel(Base, UUIDMixin, TimestampMixin):
    """
    Video ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Video title
        description: Optional summary (empty string when none)
        url: Absolute http(s) link to the video
        belt: Belt level the technique targets
        duration: Length as "MM:SS"
    """

    __tablename__ = "videos"

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str] = mapped_column(String(4096), nullable=False, default="")

    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    belt: Mapped[BeltLevel] = mapped_column(
        enum_type(BeltLevel),
        nullable=False,
        default=BeltLevel.BRANCA,
        index=True,
    )

    duration: Mapped[str] = mapped_column(String(5), nullable=False)
