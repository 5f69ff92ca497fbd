"""
Reports feature: fold `attendance_records` rows into per-student views.
"""

from datetime import date
from typing import Iterable

from tntt_portal.features.classes.aggregation import tally_by_branch, tally_by_key
from tntt_portal.features.classes.schemas import BRANCHES, TallyResult

PRESENCE_VALUES = ("present", "absent")


def build_presence_map(records: Iterable[dict], day_type: str | None = None) -> dict[str, dict[str, str]]:
    """`{student_id: {YYYY-MM-DD: 'present' | 'absent'}}`.

    Rows with an unknown status, or without a student/date, are ignored.
    If a student has both a present and an absent row for the same date
    (one per session type), 'present' wins.
    """
    presence: dict[str, dict[str, str]] = {}
    for record in records:
        if day_type and record.get("day_type") != day_type:
            continue
        status = record.get("status")
        student_id = record.get("student_id")
        attendance_date = record.get("attendance_date")
        if status not in PRESENCE_VALUES or not student_id or not attendance_date:
            continue

        by_date = presence.setdefault(str(student_id), {})
        key = str(attendance_date)[:10]
        if by_date.get(key) != "present":
            by_date[key] = status
    return presence


def tally_sessions(records: Iterable[dict], day_type: str | None = None, status: str = "present") -> TallyResult:
    """Count sessions per student with the given status (default: attended)."""
    matching = [
        r for r in records
        if r.get("status") == status and (day_type is None or r.get("day_type") == day_type)
    ]
    return tally_by_key(matching, "student_id")


def present_by_branch(
    records: Iterable[dict],
    dates: list[date],
    class_to_branch: dict[str, str],
    branches: list[str] | None = None,
) -> dict[date, dict[str, int]]:
    """Present rows per session date and branch, via each row's `class_id`.

    Every date in `dates` and every branch is present in the result, even at 0.
    Rows on other dates, or whose class is unknown/inactive, are left out.
    """
    by_date: dict[str, list[dict]] = {d.isoformat(): [] for d in dates}
    for record in records:
        if record.get("status") != "present":
            continue
        bucket = by_date.get(str(record.get("attendance_date") or "")[:10])
        if bucket is not None:
            bucket.append(record)

    return {
        d: tally_by_branch(by_date[d.isoformat()], class_to_branch, branches if branches is not None else BRANCHES)
        for d in dates
    }
