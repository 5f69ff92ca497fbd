"""
Reports feature: Service layer that gathers report inputs from the store.
"""

import logging
from datetime import date
from supabase import Client

from tntt_portal.config import get_settings
from tntt_portal.core.exceptions import STORE_ERRORS, StoreUnavailableError
from tntt_portal.core.pagination import collect_all_pages
from tntt_portal.features.classes.schemas import BRANCHES, TallyResult
from tntt_portal.features.classes.service import ClassService
from tntt_portal.features.reports.builder import (
    build_attendance_report,
    build_score_report,
    format_short_date,
)
from tntt_portal.features.reports.presence import build_presence_map, present_by_branch, tally_sessions
from tntt_portal.features.reports.schemas import (
    AttendanceReportStudent,
    AttendanceTrend,
    BranchAttendance,
    ReportDocument,
    ScoreColumns,
    TrendPoint,
)
from tntt_portal.features.school_years.calendar import last_session_dates, session_dates_between
from tntt_portal.features.school_years.service import SchoolYearService

logger = logging.getLogger(__name__)

ATTENDANCE_COLUMNS = "student_id, class_id, attendance_date, day_type, status"


class ReportService:
    """
    Builds report documents for one class.

    Flow: roster (ClassService) + attendance rows / school year → builder.
    """

    def __init__(self, db: Client):
        self.db = db
        self.settings = get_settings()
        self.classes = ClassService(db)
        self.school_years = SchoolYearService(db)

    def fetch_attendance_records(
        self,
        start: date,
        end: date,
        student_ids: list[str] | None = None,
        day_type: str | None = None,
        status: str | None = None,
    ) -> list[dict]:
        """All `attendance_records` rows in `[start, end]`, scanned page by page."""

        def fetch_page(first: int, last: int) -> list[dict]:
            query = (
                self.db.table("attendance_records")
                .select(ATTENDANCE_COLUMNS)
                .gte("attendance_date", start.isoformat())
                .lte("attendance_date", end.isoformat())
            )
            if student_ids is not None:
                query = query.in_("student_id", student_ids)
            if day_type:
                query = query.eq("day_type", day_type)
            if status:
                query = query.eq("status", status)
            result = query.order("attendance_date").range(first, last).execute()
            return result.data or []

        try:
            return collect_all_pages(fetch_page, page_size=self.settings.STORE_PAGE_SIZE)
        except STORE_ERRORS as e:
            raise StoreUnavailableError("attendance_records", str(e)) from e

    def build_attendance(
        self,
        class_id: str,
        from_date: date,
        to_date: date,
        day_type: str | None = None,
        today: date | None = None,
    ) -> ReportDocument:
        """Attendance matrix: one column per Mass session in the date range."""
        if to_date < from_date:
            from_date, to_date = to_date, from_date

        roster = self.classes.get_roster(class_id)
        dates = session_dates_between(from_date, to_date, day_type)

        presence: dict[str, dict[str, str]] = {}
        if roster.students:
            records = self.fetch_attendance_records(
                from_date,
                to_date,
                student_ids=[s.id for s in roster.students],
                day_type=day_type,
            )
            presence = build_presence_map(records, day_type)

        students = [
            AttendanceReportStudent(
                id=s.id,
                student_code=s.student_code,
                full_name=s.full_name,
                saint_name=s.saint_name,
                attendance=presence.get(s.id, {}),
            )
            for s in roster.students
        ]
        logger.info(
            f"📋 Attendance report: class={roster.class_info.name} "
            f"students={len(students)} sessions={len(dates)}"
        )
        return build_attendance_report(
            students,
            dates,
            class_name=roster.class_info.name,
            from_date=from_date,
            to_date=to_date,
            today=today,
        )

    def build_score(
        self,
        class_id: str,
        score_columns: ScoreColumns | None = None,
        today: date | None = None,
    ) -> ReportDocument:
        """Score sheet for a class, labelled with the current school year."""
        roster = self.classes.get_roster(class_id)
        year = self.school_years.get_current()

        logger.info(f"📋 Score report: class={roster.class_info.name} students={len(roster.students)}")
        return build_score_report(
            roster.students,
            score_columns,
            class_name=roster.class_info.name,
            school_year=year.name if year else "",
            today=today,
        )

    def attendance_tally(self, from_date: date, to_date: date, day_type: str | None = None) -> TallyResult:
        """Attended sessions per student across the whole parish."""
        records = self.fetch_attendance_records(from_date, to_date, day_type=day_type)
        return tally_sessions(records, day_type=day_type)

    def attendance_trend(self, day_type: str, weeks: int = 3, today: date | None = None) -> AttendanceTrend:
        """Present counts per branch for the last `weeks` sessions of `day_type`.

        `latest` compares the most recent session against active students per
        branch, most senior branch first.
        """
        if weeks < 1:
            raise ValueError(f"weeks phải >= 1 (nhận {weeks})")
        dates = last_session_dates(day_type, today or date.today(), weeks)
        class_to_branch = self.classes.active_branch_map()
        active_totals = self.classes.count_active_students_by_branch(class_to_branch)
        records = self.fetch_attendance_records(dates[0], dates[-1], day_type=day_type, status="present")

        per_date = present_by_branch(records, dates, class_to_branch, BRANCHES)
        points = [
            TrendPoint(
                session_date=d,
                label=format_short_date(d),
                counts=counts,
                total=sum(counts.values()),
            )
            for d, counts in per_date.items()
        ]
        latest_counts = per_date[dates[-1]]
        latest = [
            BranchAttendance(branch=branch, present=latest_counts[branch], total=active_totals.get(branch, 0))
            for branch in reversed(BRANCHES)
        ]

        logger.info(f"📈 Attendance trend ({day_type}): {[p.total for p in points]} across {len(dates)} sessions")
        return AttendanceTrend(day_type=day_type, weeks=points, latest=latest)
