"""
Database models package.

Exports:
  - StudentModel: Student roster entry
  - AttendanceModel: Class check-in
  - TransactionModel: Cash-book entry
  - InvoiceModel: Monthly fee bill
  - VideoModel: Technique library entry
  - UserModel: Login account

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Database model definitions for domain entities
"""

from backend.boundary.db.models.attendance_model import AttendanceModel
from backend.boundary.db.models.invoice_model import InvoiceModel
from backend.boundary.db.models.student_model import StudentModel
from backend.boundary.db.models.transaction_model import TransactionModel
from backend.boundary.db.models.user_model import UserModel
from backend.boundary.db.models.video_model import VideoModel

__all__ = [
    "AttendanceModel",
    "InvoiceModel",
    "StudentModel",
    "TransactionModel",
    "UserModel",
    "VideoModel",
]
