"""
Students feature: score and attendance evaluation.

Pure functions only, no store access. The school year's `total_weeks` is
passed in by the caller.

Weights:
    TB giáo lý    = (45' HK1 + 45' HK2 + Thi HK1 x2 + Thi HK2 x2) / 6
    TB chuyên cần = (buổi T5 x0.4 + buổi CN x0.6) x (10 / tổng số tuần)
    TB tổng       = TB giáo lý x0.6 + TB chuyên cần x0.4

A student who attends every Thursday and every Sunday of the year scores 10
for attendance.
"""

import math

from tntt_portal.features.students.schemas import (
    Classification,
    DerivedMetrics,
    StudentRecord,
    WeekCell,
)

# Band thresholds, checked top-down (first match wins)
CLASSIFICATION_THRESHOLDS: list[tuple[float, Classification]] = [
    (8.0, Classification.GIOI),
    (6.5, Classification.KHA),
    (5.0, Classification.TB),
]

CATECHISM_WEIGHT = 0.6
ATTENDANCE_WEIGHT = 0.4
THU5_WEIGHT = 0.4
CN_WEIGHT = 0.6

WEEKS_PER_ROW = 10


def _num(value) -> float:
    """Coerce a nullable score to a finite float (null/garbage → 0)."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def session_count(value) -> int:
    """Coerce a nullable session counter to a non-negative int (20.5 → 20)."""
    return max(int(_num(value)), 0)


def average_catechism(
    score_45_hk1: float | None,
    score_exam_hk1: float | None,
    score_45_hk2: float | None,
    score_exam_hk2: float | None,
) -> float:
    """Điểm TB giáo lý cả năm (thi học kỳ hệ số 2)."""
    return (
        _num(score_45_hk1)
        + _num(score_45_hk2)
        + 2 * _num(score_exam_hk1)
        + 2 * _num(score_exam_hk2)
    ) / 6


def average_attendance(attendance_thu5: float | None, attendance_cn: float | None, total_weeks: int) -> float:
    """Điểm chuyên cần quy về thang 10. Returns 0 when `total_weeks <= 0`."""
    weeks = session_count(total_weeks)
    if weeks <= 0:
        return 0.0
    weighted = session_count(attendance_thu5) * THU5_WEIGHT + session_count(attendance_cn) * CN_WEIGHT
    return weighted * (10 / weeks)


def classify(value: float | None) -> Classification:
    """Map a yearly average to its band; `None` means "not graded yet"."""
    if value is None:
        return Classification.NONE
    score = _num(value)
    for threshold, band in CLASSIFICATION_THRESHOLDS:
        if score >= threshold:
            return band
    return Classification.YEU


def compute_metrics(student: StudentRecord, total_weeks: int) -> DerivedMetrics:
    """Derive averages and classification for one student.

    Never raises: null fields count as 0 and a non-positive `total_weeks`
    zeroes the attendance average.
    """
    avg_catechism = average_catechism(
        student.score_45_hk1,
        student.score_exam_hk1,
        student.score_45_hk2,
        student.score_exam_hk2,
    )
    avg_attendance = average_attendance(student.attendance_thu5, student.attendance_cn, total_weeks)
    total_avg = avg_catechism * CATECHISM_WEIGHT + avg_attendance * ATTENDANCE_WEIGHT

    return DerivedMetrics(
        avg_catechism=avg_catechism,
        avg_attendance=avg_attendance,
        total_avg=total_avg,
        classification=classify(total_avg),
    )


def calculate_year_average(
    score_45_hk1: float | None,
    score_exam_hk1: float | None,
    score_45_hk2: float | None,
    score_exam_hk2: float | None,
) -> float:
    """TB giáo lý rounded to one decimal, as previewed on the student form."""
    return round(average_catechism(score_45_hk1, score_exam_hk1, score_45_hk2, score_exam_hk2), 1)


def attendance_week_grid(attended: float | None, total_weeks: int) -> list[WeekCell]:
    """Build `total_weeks` cells where the first `attended` weeks are marked.

    This is a display approximation: the store only keeps a session count,
    so the grid cannot show *which* weeks were actually attended.
    """
    count = session_count(attended)
    return [WeekCell(week=i, attended=i <= count) for i in range(1, session_count(total_weeks) + 1)]


def chunk_week_rows(cells: list[WeekCell], size: int = WEEKS_PER_ROW) -> list[list[WeekCell]]:
    """Split a week grid into display rows of `size` cells."""
    if size <= 0:
        return [cells] if cells else []
    return [cells[i:i + size] for i in range(0, len(cells), size)]
