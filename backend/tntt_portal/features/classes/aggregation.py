"""
Classes feature: tallies over scanned record sets, and class membership.

Everything here works on plain rows (dicts) already pulled by
`core.pagination.scan_table`; nothing touches the store.
"""

from typing import Iterable

from tntt_portal.features.classes.schemas import BRANCHES, ClassInfo, TallyResult


def tally_by_key(records: Iterable[dict], key: str = "class_id") -> TallyResult:
    """Count records per value of `key` in one pass.

    Rows whose key is missing, null or empty are counted only in
    `without_key`, so `sum(counts) + without_key == len(records)` always holds.
    """
    counts: dict[str, int] = {}
    with_key = 0
    without_key = 0

    for record in records:
        value = record.get(key)
        if value is None or value == "":
            without_key += 1
            continue
        bucket = str(value)
        counts[bucket] = counts.get(bucket, 0) + 1
        with_key += 1

    return TallyResult(counts=counts, with_key=with_key, without_key=without_key)


def tally_by_branch(
    students: Iterable[dict],
    class_to_branch: dict[str, str],
    branches: list[str] | None = None,
) -> dict[str, int]:
    """Count students per branch through their class.

    Students without a class, or whose class is not in `class_to_branch`
    (inactive/deleted), are left out. Every branch in `branches` is present
    in the result, even at 0.
    """
    result = {branch: 0 for branch in (branches if branches is not None else BRANCHES)}
    per_class = tally_by_key(students, "class_id")

    for class_id, count in per_class.counts.items():
        branch = class_to_branch.get(class_id)
        if branch:
            result[branch] = result.get(branch, 0) + count
    return result


def is_class_member(record: dict, cls: ClassInfo) -> bool:
    """Two-step membership check for a user/student row.

    1. If the row has a `class_id`, it belongs to `cls` only when the ids match.
    2. Otherwise fall back to exact equality of the legacy `class_name` column.

    Step 2 exists because older rows were linked by class name only. Names are
    not unique, so two classes sharing a name both claim those rows.
    """
    class_id = record.get("class_id")
    if class_id:
        return str(class_id) == cls.id
    class_name = record.get("class_name")
    return bool(class_name) and class_name == cls.name


def match_class_members(cls: ClassInfo, records: Iterable[dict]) -> list[dict]:
    """Rows belonging to `cls`, input order preserved."""
    return [r for r in records if is_class_member(r, cls)]


def format_teacher_name(user: dict) -> str:
    """'{tên thánh} {họ tên}' with missing parts dropped."""
    return f"{user.get('saint_name') or ''} {user.get('full_name') or ''}".strip()
