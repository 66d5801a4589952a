"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - StudentModel, AttendanceModel, TransactionModel, InvoiceModel, VideoModel, UserModel
  - student_crud, attendance_crud, transaction_crud, invoice_crud, video_crud, user_crud

Dependencies: sqlalchemy, backend.configs
System role: Record store adapter for the academy collections with one
unit of work per request.
"""

from backend.boundary.db.base import Base, TimestampMixin, UUIDMixin
from backend.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from backend.boundary.db.models import (
    AttendanceModel,
    InvoiceModel,
    StudentModel,
    TransactionModel,
    UserModel,
    VideoModel,
)
from backend.boundary.db.CRUD import (
    BaseCRUD,
    attendance_crud,
    invoice_crud,
    student_crud,
    transaction_crud,
    user_crud,
    video_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "AttendanceModel",
    "InvoiceModel",
    "StudentModel",
    "TransactionModel",
    "UserModel",
    "VideoModel",
    # CRUD
    "BaseCRUD",
    "attendance_crud",
    "invoice_crud",
    "student_crud",
    "transaction_crud",
    "user_crud",
    "video_crud",
]
