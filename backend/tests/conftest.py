"""
Shared fixtures: settings env defaults and an in-memory Supabase stand-in.

FakeSupabase only implements the query-builder calls the services use
(select / eq / gte / lte / in_ / order / limit / range / execute).
"""

import os
from types import SimpleNamespace

import httpx
import pytest

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str):
        self._client = client
        self._table = table
        self._filters = []
        self._order: str | None = None
        self._limit: int | None = None
        self._range: tuple[int, int] | None = None

    def select(self, columns: str = "*"):
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def gte(self, column, value):
        self._filters.append(lambda row: row.get(column) is not None and row.get(column) >= value)
        return self

    def lte(self, column, value):
        self._filters.append(lambda row: row.get(column) is not None and row.get(column) <= value)
        return self

    def in_(self, column, values):
        allowed = set(values)
        self._filters.append(lambda row: row.get(column) in allowed)
        return self

    def order(self, column, desc: bool = False):
        self._order = column
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def range(self, start: int, end: int):
        self._range = (start, end)
        return self

    def execute(self):
        self._client.requests.append((self._table, self._range))
        if self._client.fail_on is not None and len(self._client.requests) >= self._client.fail_on:
            raise httpx.ConnectError("store unreachable")

        rows = [r for r in self._client.tables.get(self._table, []) if all(f(r) for f in self._filters)]
        if self._order:
            rows = sorted(rows, key=lambda r: (r.get(self._order) is None, r.get(self._order)))
        if self._range:
            start, end = self._range
            rows = rows[start:end + 1]
        if self._limit is not None:
            rows = rows[:self._limit]
        return SimpleNamespace(data=[dict(r) for r in rows])


class FakeSupabase:
    def __init__(self, tables: dict[str, list[dict]] | None = None, fail_on: int | None = None):
        self.tables = tables or {}
        self.requests: list[tuple[str, tuple[int, int] | None]] = []
        self.fail_on = fail_on  # 1-based request number that raises

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def range_requests(self, table: str) -> list[tuple[int, int]]:
        return [r for t, r in self.requests if t == table and r is not None]


@pytest.fixture
def make_db():
    return FakeSupabase


@pytest.fixture
def school_year_row():
    return {
        "id": "sy-2025",
        "name": "2025 - 2026",
        "start_date": "2025-09-14",
        "end_date": "2026-05-31",
        "is_current": True,
        "parish_name": "Giáo xứ Thiên Ân",
        "total_weeks": 40,
        "status": "ACTIVE",
    }


@pytest.fixture
def parish_tables(school_year_row):
    """Three classes (one inactive), teachers, students and attendance rows."""
    return {
        "classes": [
            {"id": "c1", "name": "Ấu Nhi 1", "branch": "Ấu Nhi", "display_order": 2, "status": "ACTIVE"},
            {"id": "c2", "name": "Chiên Con 1", "branch": "Chiên Con", "display_order": 1, "status": "ACTIVE"},
            {"id": "c3", "name": "Nghĩa Sĩ 1", "branch": "Nghĩa Sĩ", "display_order": 3, "status": "INACTIVE"},
        ],
        "users": [
            {"id": "u1", "full_name": "Trần Văn An", "saint_name": "Giuse", "role": "giao_ly_vien", "class_id": "c1", "class_name": "Ấu Nhi 1"},
            {"id": "u2", "full_name": "Lê Thị Bình", "saint_name": None, "role": "giao_ly_vien", "class_id": None, "class_name": "Ấu Nhi 1"},
            {"id": "u3", "full_name": "Phạm Minh", "saint_name": "Phêrô", "role": "giao_ly_vien", "class_id": "c2", "class_name": "Ấu Nhi 1"},
            {"id": "u4", "full_name": "Admin", "saint_name": None, "role": "admin", "class_id": "c1", "class_name": None},
        ],
        "thieu_nhi": [
            {
                "id": "s1", "full_name": "Nguyễn Văn Minh", "saint_name": "Phaolô", "student_code": "AN001",
                "class_id": "c1", "status": "ACTIVE",
                "score_45_hk1": 8, "score_exam_hk1": 9, "score_45_hk2": 7, "score_exam_hk2": 8,
                "attendance_thu5": 20, "attendance_cn": 25,
                "average_hk1": 8.7, "average_hk2": 7.7, "average_year": 8.2,
            },
            {
                "id": "s2", "full_name": "Đỗ Thị Lan", "saint_name": None, "student_code": "AN002",
                "class_id": "c1", "status": "ACTIVE",
                "score_45_hk1": None, "score_exam_hk1": None, "score_45_hk2": None, "score_exam_hk2": None,
                "attendance_thu5": None, "attendance_cn": None,
                "average_year": None,
            },
            {"id": "s3", "full_name": "Vũ Bảo", "class_id": "c2", "status": "ACTIVE"},
            {"id": "s4", "full_name": "Hà Anh", "class_id": None, "status": "ACTIVE"},
            {"id": "s5", "full_name": "Lý Nam", "class_id": "c3", "status": "ACTIVE"},
            {"id": "s6", "full_name": "Mai Chi", "class_id": "c2", "status": "INACTIVE"},
        ],
        "attendance_records": [
            {"student_id": "s1", "class_id": "c1", "attendance_date": "2025-11-13", "day_type": "thu5", "status": "present"},
            {"student_id": "s1", "class_id": "c1", "attendance_date": "2025-11-16", "day_type": "cn", "status": "absent"},
            {"student_id": "s2", "class_id": "c1", "attendance_date": "2025-11-16", "day_type": "cn", "status": "present"},
            {"student_id": "s3", "class_id": "c2", "attendance_date": "2025-11-16", "day_type": "cn", "status": "present"},
            {"student_id": "s1", "class_id": "c1", "attendance_date": "2025-12-25", "day_type": "thu5", "status": "present"},
        ],
        "school_years": [school_year_row],
    }
