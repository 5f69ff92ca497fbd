"""
Classes feature: Service layer for class overview, branch stats and rosters.
"""

import logging
from supabase import Client

from tntt_portal.config import get_settings
from tntt_portal.core.exceptions import STORE_ERRORS, NotFoundError, StoreUnavailableError
from tntt_portal.core.pagination import scan_table
from tntt_portal.features.classes.aggregation import (
    format_teacher_name,
    match_class_members,
    tally_by_branch,
    tally_by_key,
)
from tntt_portal.features.classes.schemas import (
    BRANCHES,
    BranchCount,
    ClassInfo,
    ClassOverviewItem,
    ClassOverviewResponse,
    ClassRoster,
    TallyResult,
)
from tntt_portal.features.students.schemas import StudentRecord

logger = logging.getLogger(__name__)

TEACHER_ROLE = "giao_ly_vien"


class ClassService:
    """
    Read-side queries over `classes`, `users` and `thieu_nhi`.

    Student tables outgrow the PostgREST row cap, so every student read goes
    through `scan_table`. A failed page aborts the whole call with
    StoreUnavailableError; no partial count is ever returned.
    """

    def __init__(self, db: Client):
        self.db = db
        self.settings = get_settings()

    # ── Store reads ──────────────────────────────────────

    def _scan(self, table: str, columns: str, filters: dict | None = None, order_by: str | None = None) -> list[dict]:
        try:
            return scan_table(
                self.db,
                table,
                columns,
                filters=filters,
                order_by=order_by,
                page_size=self.settings.STORE_PAGE_SIZE,
            )
        except STORE_ERRORS as e:
            raise StoreUnavailableError(table, str(e)) from e

    def list_classes(self, active_only: bool = False) -> list[ClassInfo]:
        """All classes ordered by `display_order`."""
        try:
            query = self.db.table("classes").select("*")
            if active_only:
                query = query.eq("status", "ACTIVE")
            result = query.order("display_order").execute()
        except STORE_ERRORS as e:
            raise StoreUnavailableError("classes", str(e)) from e
        return [ClassInfo(**row) for row in result.data or []]

    def get_class(self, class_id: str) -> ClassInfo:
        try:
            result = self.db.table("classes").select("*").eq("id", class_id).limit(1).execute()
        except STORE_ERRORS as e:
            raise StoreUnavailableError("classes", str(e)) from e
        if not result.data:
            raise NotFoundError("lớp", class_id)
        return ClassInfo(**result.data[0])

    def list_teachers(self) -> list[dict]:
        try:
            result = (
                self.db.table("users")
                .select("id, full_name, saint_name, class_id, class_name")
                .eq("role", TEACHER_ROLE)
                .execute()
            )
        except STORE_ERRORS as e:
            raise StoreUnavailableError("users", str(e)) from e
        return result.data or []

    # ── Aggregates ───────────────────────────────────────

    def count_students_by_class(self) -> TallyResult:
        """Full scan of `thieu_nhi` folded into per-class counts."""
        students = self._scan("thieu_nhi", "id, class_id")
        tally = tally_by_key(students, "class_id")
        logger.debug(
            f"Student tally: fetched={len(students)} with_class={tally.with_key} "
            f"without_class={tally.without_key} by_class={tally.counts}"
        )
        return tally

    def get_overview(self) -> ClassOverviewResponse:
        """Classes with teachers (legacy dual-key match) and student counts."""
        classes = self.list_classes()
        teachers = self.list_teachers()
        tally = self.count_students_by_class()

        items = []
        for cls in classes:
            items.append(ClassOverviewItem(
                **cls.model_dump(),
                teachers=[format_teacher_name(t) for t in match_class_members(cls, teachers)],
                student_count=tally.counts.get(cls.id, 0),
            ))

        return ClassOverviewResponse(
            classes=items,
            total_students=tally.total,
            students_with_class=tally.with_key,
            students_without_class=tally.without_key,
        )

    def active_branch_map(self) -> dict[str, str]:
        """`{class_id: branch}` for active classes."""
        return {cls.id: cls.branch for cls in self.list_classes(active_only=True)}

    def count_active_students_by_branch(self, class_to_branch: dict[str, str] | None = None) -> dict[str, int]:
        """Active students per branch, seeded with every branch at 0."""
        if class_to_branch is None:
            class_to_branch = self.active_branch_map()
        students = self._scan("thieu_nhi", "id, class_id", filters={"status": "ACTIVE"})
        return tally_by_branch(students, class_to_branch, BRANCHES)

    def get_branch_stats(self) -> list[BranchCount]:
        """Active students per branch (through their active class)."""
        counts = self.count_active_students_by_branch()
        return [BranchCount(branch=branch, student_count=count) for branch, count in counts.items()]

    def get_roster(self, class_id: str) -> ClassRoster:
        """A class and its students, ordered by full name.

        Rows are fetched by `class_id`; `match_class_members` then applies the
        same id-then-name rule used for teachers.
        """
        cls = self.get_class(class_id)
        rows = self._scan("thieu_nhi", "*", filters={"class_id": class_id}, order_by="full_name")
        students = [StudentRecord(**row) for row in match_class_members(cls, rows)]
        return ClassRoster(class_info=cls, students=students)
