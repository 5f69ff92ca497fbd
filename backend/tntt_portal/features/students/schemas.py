"""
Students feature: Schemas for student records and derived metrics.
"""

from enum import Enum
from pydantic import BaseModel, field_validator


class Classification(str, Enum):
    """Xếp loại học lực theo điểm tổng kết năm."""

    GIOI = "Giỏi"
    KHA = "Khá"
    TB = "TB"
    YEU = "Yếu"
    NONE = "-"  # Chưa có điểm tổng kết


class StudentRecord(BaseModel):
    """A `thieu_nhi` row as read by the engine (every score may be null)."""
    id: str
    full_name: str = ""
    saint_name: str | None = None       # Tên thánh
    student_code: str | None = None
    class_id: str | None = None

    # Điểm giáo lý (45 phút + thi, hai học kỳ)
    score_45_hk1: float | None = None
    score_exam_hk1: float | None = None
    score_45_hk2: float | None = None
    score_exam_hk2: float | None = None

    # Số buổi tham dự Thánh lễ
    attendance_thu5: float | None = None  # Thứ năm
    attendance_cn: float | None = None    # Chúa nhật

    # Persisted report columns
    score_di_le_t5: float | None = None
    score_hoc_gl: float | None = None
    average_hk1: float | None = None
    average_hk2: float | None = None
    average_year: float | None = None

    @field_validator("full_name", mode="before")
    @classmethod
    def _null_name_to_empty(cls, value):
        return value or ""


class DerivedMetrics(BaseModel):
    """Computed per-student averages (never persisted)."""
    avg_catechism: float      # TB giáo lý
    avg_attendance: float     # TB chuyên cần (thang 10)
    total_avg: float          # TB tổng
    classification: Classification


class WeekCell(BaseModel):
    """One cell of the week-attendance grid."""
    week: int                 # 1-based
    attended: bool


class AttendanceGrid(BaseModel):
    """Thursday and Sunday week grids, already split into display rows."""
    total_weeks: int
    attendance_thu5: int
    attendance_cn: int
    thu5_rows: list[list[WeekCell]]
    cn_rows: list[list[WeekCell]]


class StudentMetricsResponse(BaseModel):
    """Response for GET /students/{id}/metrics."""
    student_id: str
    full_name: str
    total_weeks: int
    metrics: DerivedMetrics
    year_average: float       # TB năm as previewed on the edit form (1 decimal)
