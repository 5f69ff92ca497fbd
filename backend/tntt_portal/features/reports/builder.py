"""
Reports feature: assemble attendance matrices and score sheets.

Stateless: takes a roster (already ordered) plus dates or column flags and
returns a ReportDocument. Rendering to image/PDF happens in the web client.

Both report kinds start with the same name block:

    STT | Tên thánh | Họ và tên (family + middle) | Tên (given name)

Vietnamese names put the given name last, so the last whitespace token of
`full_name` becomes "Tên" and everything before it "Họ và tên".
"""

import math
from datetime import date
from typing import Callable

from tntt_portal.features.reports.schemas import (
    AttendanceReportStudent,
    ReportColumn,
    ReportDocument,
    ScoreColumns,
)
from tntt_portal.features.students.schemas import StudentRecord
from tntt_portal.features.students.scoring import classify

ATTENDANCE_TITLE = "ĐIỂM DANH THAM DỰ THÁNH LỄ THỨ NĂM VÀ CHÚA NHẬT"
SCORE_TITLE = "BÁO CÁO ĐIỂM SỐ HỌC TẬP GIÁO LÝ"

PRESENT_MARK = "✓"
ABSENT_MARK = "x"
MISSING_VALUE = "-"

NAME_COLUMNS = [
    ReportColumn(key="stt", label="STT"),
    ReportColumn(key="saint_name", label="Tên thánh"),
    ReportColumn(key="family_name", label="Họ và tên"),
    ReportColumn(key="given_name", label="Tên"),
]

CLASSIFICATION_COLUMN = ReportColumn(key="classification", label="Xếp loại")

# (column key on StudentRecord, label, visible given resolved flags)
SCORE_COLUMN_SPECS: list[tuple[str, str, Callable[[ScoreColumns], bool]]] = [
    ("score_di_le_t5", "Đi Lễ T5", lambda f: f.di_le_t5),
    ("score_hoc_gl", "Học GL", lambda f: f.hoc_gl),
    ("score_45_hk1", "45p HK1", lambda f: f.score_45_hk1),
    ("score_exam_hk1", "Thi HK1", lambda f: f.score_exam_hk1),
    ("average_hk1", "TB HK1", lambda f: f.score_45_hk1 or f.score_exam_hk1),
    ("score_45_hk2", "45p HK2", lambda f: f.score_45_hk2),
    ("score_exam_hk2", "Thi HK2", lambda f: f.score_exam_hk2),
    ("average_hk2", "TB HK2", lambda f: f.score_45_hk2 or f.score_exam_hk2),
    ("average_year", "TB Năm", lambda f: f.diem_tong),
]


# ── Formatting helpers ───────────────────────────────────

def split_name(full_name: str | None) -> tuple[str, str]:
    """Return `(family_and_middle, given)`; ("", "") for a blank name."""
    parts = (full_name or "").split()
    if not parts:
        return "", ""
    return " ".join(parts[:-1]), parts[-1]


def format_short_date(value: date) -> str:
    """dd/mm"""
    return f"{value.day:02d}/{value.month:02d}"


def format_full_date(value: date) -> str:
    """d/m/yyyy (no zero padding, as printed on paper reports)."""
    return f"{value.day}/{value.month}/{value.year}"


def format_score(value) -> str:
    """Score cell text; '-' when the score is missing."""
    if value is None:
        return MISSING_VALUE
    try:
        number = float(value)
    except (TypeError, ValueError):
        return MISSING_VALUE
    if not math.isfinite(number):
        return MISSING_VALUE
    return f"{round(number, 2):g}"


def format_presence(value: str | None) -> str:
    if value == "present":
        return PRESENT_MARK
    if value == "absent":
        return ABSENT_MARK
    return ""


def _name_cells(index: int, full_name: str | None, saint_name: str | None) -> dict[str, str]:
    family_name, given_name = split_name(full_name)
    return {
        "stt": str(index),
        "saint_name": saint_name or "",
        "family_name": family_name,
        "given_name": given_name,
    }


def _as_date(value: date | str) -> date:
    return value if isinstance(value, date) else date.fromisoformat(str(value)[:10])


# ── Attendance matrix ────────────────────────────────────

def attendance_columns(dates: list[date | str]) -> list[ReportColumn]:
    """Name block + one column per date, in the given order."""
    columns = list(NAME_COLUMNS)
    for d in dates:
        day = _as_date(d)
        columns.append(ReportColumn(key=day.isoformat(), label=format_short_date(day)))
    return columns


def build_attendance_report(
    students: list[AttendanceReportStudent],
    dates: list[date | str],
    class_name: str = "",
    from_date: date | None = None,
    to_date: date | None = None,
    today: date | None = None,
) -> ReportDocument:
    """One row per student; cells are ✓ (present), x (absent) or blank."""
    columns = attendance_columns(dates)
    date_keys = [c.key for c in columns[len(NAME_COLUMNS):]]

    rows = []
    for index, student in enumerate(students, start=1):
        row = _name_cells(index, student.full_name, student.saint_name)
        for key in date_keys:
            row[key] = format_presence(student.attendance.get(key))
        rows.append(row)

    today = today or date.today()
    period = ""
    if from_date and to_date:
        period = f" | Thời gian: {format_full_date(from_date)} đến {format_full_date(to_date)}"

    return ReportDocument(
        kind="attendance",
        title=ATTENDANCE_TITLE,
        class_name=class_name,
        columns=columns,
        rows=rows,
        footer=f"Báo cáo được tạo ngày: {format_full_date(today)}{period}",
    )


# ── Score sheet ──────────────────────────────────────────

def score_columns_for(score_columns: ScoreColumns | None) -> list[ReportColumn]:
    """Visible columns for the given flags.

    No flags (or none set) shows everything. A half-year "TB" column is shown
    when either of its two inputs is shown. "Xếp loại" is always last.
    """
    flags = (score_columns or ScoreColumns()).resolved()
    columns = list(NAME_COLUMNS)
    for key, label, visible in SCORE_COLUMN_SPECS:
        if visible(flags):
            columns.append(ReportColumn(key=key, label=label))
    columns.append(CLASSIFICATION_COLUMN)
    return columns


def build_score_report(
    students: list[StudentRecord],
    score_columns: ScoreColumns | None = None,
    class_name: str = "",
    school_year: str = "",
    today: date | None = None,
) -> ReportDocument:
    """Score sheet; classification comes from the persisted `average_year`."""
    columns = score_columns_for(score_columns)
    score_keys = [c.key for c in columns[len(NAME_COLUMNS):-1]]

    rows = []
    for index, student in enumerate(students, start=1):
        row = _name_cells(index, student.full_name, student.saint_name)
        for key in score_keys:
            row[key] = format_score(getattr(student, key, None))
        row[CLASSIFICATION_COLUMN.key] = classify(student.average_year).value
        rows.append(row)

    today = today or date.today()
    return ReportDocument(
        kind="score",
        title=SCORE_TITLE,
        class_name=class_name,
        columns=columns,
        rows=rows,
        footer=f"Báo cáo được tạo ngày: {format_full_date(today)} | Năm học: {school_year}",
    )
