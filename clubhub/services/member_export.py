"""
Excel export of the member roster.
"""

from __future__ import annotations

from io import BytesIO
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from clubhub.models.base import as_utc
from clubhub.models.member import Member

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

COLUMNS = [
    ("Full Name", "full_name", 30),
    ("Email", "email", 32),
    ("Student ID", "student_id", 14),
    ("Department", "department", 24),
    ("Year", "year", 8),
    ("Phone", "phone", 16),
    ("Interests", "interests", 40),
    ("Status", "status", 10),
    ("Joined", "joined_at", 20),
]


def export_members_workbook(members: Iterable[Member]) -> bytes:
    """Write one header row then one row per member; returns the xlsx bytes."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Members"

    header_fill = PatternFill(start_color="1F2937", end_color="1F2937", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF", size=11)

    for index, (title, _, width) in enumerate(COLUMNS, start=1):
        cell = ws.cell(row=1, column=index, value=title)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="left", vertical="center")
        ws.column_dimensions[cell.column_letter].width = width
    ws.freeze_panes = "A2"

    for row, member in enumerate(members, start=2):
        for column, (_, attr, _) in enumerate(COLUMNS, start=1):
            value = getattr(member, attr)
            if attr == "joined_at" and value is not None:
                # Excel cells carry no timezone; write UTC wall time.
                value = as_utc(value).replace(tzinfo=None)
            ws.cell(row=row, column=column, value=value)

    out = BytesIO()
    wb.save(out)
    return out.getvalue()
