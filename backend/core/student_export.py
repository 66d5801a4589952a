"""
Student roster CSV export.

Dependencies: csv (stdlib), backend.core.formatters
System role: Spreadsheet export of the (filtered) student list
"""

import csv
import io
from datetime import date
from typing import Any, Iterable

from backend.core.enums import StudentStatus
from backend.core.formatters import format_plain_amount

CSV_HEADERS = ["Nome", "Email", "Faixa", "Status", "Mensalidade", "Presenças"]

STATUS_LABELS = {
    StudentStatus.ACTIVE: "Ativo",
    StudentStatus.INACTIVE: "Inativo",
    StudentStatus.SUSPENDED: "Suspenso",
}


def export_filename(today: date) -> str:
    return f"alunos_{today.isoformat()}.csv"


def students_to_csv(students: Iterable[Any]) -> str:
    """
    Render students as CSV with every cell quoted.

    Args:
        students: Student records (name, email, belt, status, monthly_fee, total_attendances)

    Returns:
        str: CSV document, header first, newline-terminated rows
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for s in students:
        writer.writerow([
            s.name,
            s.email,
            getattr(s.belt, "value", s.belt),
            STATUS_LABELS[StudentStatus(s.status)],
            format_plain_amount(float(s.monthly_fee or 0)),
            str(s.total_attendances or 0),
        ])
    return buffer.getvalue()
