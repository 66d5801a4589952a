"""
CRUD operations for database models.

Exports base CRUD class and collection-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from backend.boundary.db.CRUD import student_crud, invoice_crud

    # Use singleton instances
    student = await student_crud.get_by_id(db, student_id)

    # Or instantiate classes directly for custom behavior
    from backend.boundary.db.CRUD import StudentCRUD
    custom_crud = StudentCRUD()
"""

from backend.boundary.db.CRUD.attendance_crud import AttendanceCRUD, attendance_crud
from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.CRUD.invoice_crud import InvoiceCRUD, invoice_crud
from backend.boundary.db.CRUD.student_crud import StudentCRUD, student_crud
from backend.boundary.db.CRUD.transaction_crud import TransactionCRUD, transaction_crud
from backend.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from backend.boundary.db.CRUD.video_crud import VideoCRUD, video_crud

__all__ = [
    "BaseCRUD",
    "AttendanceCRUD",
    "attendance_crud",
    "InvoiceCRUD",
    "invoice_crud",
    "StudentCRUD",
    "student_crud",
    "TransactionCRUD",
    "transaction_crud",
    "UserCRUD",
    "user_crud",
    "VideoCRUD",
    "video_crud",
]
