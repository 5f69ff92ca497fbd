"""
Students feature: Service layer wiring store reads to the evaluator.
"""

from supabase import Client

from tntt_portal.core.exceptions import STORE_ERRORS, NotFoundError, StoreUnavailableError
from tntt_portal.features.school_years.service import SchoolYearService
from tntt_portal.features.students.schemas import (
    AttendanceGrid,
    StudentMetricsResponse,
    StudentRecord,
)
from tntt_portal.features.students.scoring import (
    attendance_week_grid,
    calculate_year_average,
    chunk_week_rows,
    compute_metrics,
    session_count,
)


class StudentService:
    """Loads a student and the current school year, then evaluates."""

    def __init__(self, db: Client):
        self.db = db
        self.school_years = SchoolYearService(db)

    def get_student(self, student_id: str) -> StudentRecord:
        try:
            result = self.db.table("thieu_nhi").select("*").eq("id", student_id).limit(1).execute()
        except STORE_ERRORS as e:
            raise StoreUnavailableError("thieu_nhi", str(e)) from e
        if not result.data:
            raise NotFoundError("thiếu nhi", student_id)
        return StudentRecord(**result.data[0])

    def _total_weeks(self) -> int:
        return self.school_years.resolve_total_weeks(self.school_years.get_current())

    def get_metrics(self, student_id: str) -> StudentMetricsResponse:
        student = self.get_student(student_id)
        total_weeks = self._total_weeks()
        return StudentMetricsResponse(
            student_id=student.id,
            full_name=student.full_name,
            total_weeks=total_weeks,
            metrics=compute_metrics(student, total_weeks),
            year_average=calculate_year_average(
                student.score_45_hk1,
                student.score_exam_hk1,
                student.score_45_hk2,
                student.score_exam_hk2,
            ),
        )

    def get_attendance_grid(self, student_id: str) -> AttendanceGrid:
        """Thursday/Sunday week grids in rows of 10 (count-based approximation)."""
        student = self.get_student(student_id)
        total_weeks = self._total_weeks()
        thu5 = session_count(student.attendance_thu5)
        cn = session_count(student.attendance_cn)
        return AttendanceGrid(
            total_weeks=total_weeks,
            attendance_thu5=thu5,
            attendance_cn=cn,
            thu5_rows=chunk_week_rows(attendance_week_grid(thu5, total_weeks)),
            cn_rows=chunk_week_rows(attendance_week_grid(cn, total_weeks)),
        )
