"""
Reports feature: Schemas for report requests and tabular documents.
"""

from datetime import date
from typing import Literal
from pydantic import BaseModel, Field

Presence = Literal["present", "absent"]
ReportKind = Literal["attendance", "score"]


class ScoreColumns(BaseModel):
    """Which score columns to export (camelCase aliases match the web client)."""
    model_config = {"populate_by_name": True}

    di_le_t5: bool = Field(False, alias="diLeT5")             # Đi lễ T5
    hoc_gl: bool = Field(False, alias="hocGL")                # Học giáo lý
    diem_tb: bool = Field(False, alias="diemTB")              # Điểm TB
    score_45_hk1: bool = Field(False, alias="score45HK1")
    score_exam_hk1: bool = Field(False, alias="scoreExamHK1")
    score_45_hk2: bool = Field(False, alias="score45HK2")
    score_exam_hk2: bool = Field(False, alias="scoreExamHK2")
    diem_tong: bool = Field(False, alias="diemTong")          # TB năm

    def any_selected(self) -> bool:
        return any(self.model_dump().values())

    def resolved(self) -> "ScoreColumns":
        """Nothing selected means everything selected."""
        if self.any_selected():
            return self
        return ScoreColumns(**{name: True for name in type(self).model_fields})


class AttendanceReportStudent(BaseModel):
    """A roster entry with its presence per ISO date."""
    id: str
    student_code: str | None = None
    full_name: str = ""
    saint_name: str | None = None
    attendance: dict[str, Presence | None] = {}


class ReportColumn(BaseModel):
    key: str
    label: str


class ReportDocument(BaseModel):
    """A rendered-ready table: one row per student, cells keyed by column key."""
    kind: ReportKind
    title: str
    class_name: str = ""
    columns: list[ReportColumn]
    rows: list[dict[str, str]] = []
    footer: str = ""

    @property
    def header(self) -> list[str]:
        return [c.label for c in self.columns]


class AttendanceReportRequest(BaseModel):
    class_id: str
    from_date: date
    to_date: date
    day_type: Literal["thu5", "cn"] | None = None  # None = both sessions


class ScoreReportRequest(BaseModel):
    class_id: str
    score_columns: ScoreColumns | None = None


class TrendPoint(BaseModel):
    """Present count per branch on one session date."""
    session_date: date
    label: str                   # dd/mm
    counts: dict[str, int]
    total: int


class BranchAttendance(BaseModel):
    """Latest session: present vs. active students of one branch."""
    branch: str
    present: int
    total: int


class AttendanceTrend(BaseModel):
    """Response for GET /reports/attendance-trend."""
    day_type: Literal["thu5", "cn"]
    weeks: list[TrendPoint]      # oldest first
    latest: list[BranchAttendance]
