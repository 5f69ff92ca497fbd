"""
Unit tests for the paginated full-scan collector.
"""

import math

import httpx
import pytest

from tntt_portal.core.pagination import collect_all_pages, scan_table


def make_store(n: int):
    rows = [{"id": f"s{i}"} for i in range(n)]
    calls = []

    def fetch_page(start: int, end: int) -> list[dict]:
        calls.append((start, end))
        return rows[start:end + 1]

    return fetch_page, calls


class TestCollectAllPages:
    def test_2500_rows_page_1000(self):
        fetch_page, calls = make_store(2500)
        rows = collect_all_pages(fetch_page, page_size=1000)

        assert len(rows) == 2500
        assert calls == [(0, 999), (1000, 1999), (2000, 2999)]

    @pytest.mark.parametrize("n,page_size", [(0, 1000), (1, 1000), (999, 1000), (1000, 1000), (2000, 1000), (7, 3), (9, 3)])
    def test_request_count_and_no_duplicates(self, n, page_size):
        fetch_page, calls = make_store(n)
        rows = collect_all_pages(fetch_page, page_size=page_size)

        assert len(calls) == math.ceil((n + 1) / page_size)
        assert len(rows) == n
        assert len({r["id"] for r in rows}) == n

    def test_exact_multiple_needs_one_empty_page(self):
        fetch_page, calls = make_store(2000)
        collect_all_pages(fetch_page, page_size=1000)
        assert calls[-1] == (2000, 2999)

    def test_none_page_treated_as_empty(self):
        rows = collect_all_pages(lambda start, end: None, page_size=10)
        assert rows == []

    def test_page_error_propagates_unmodified(self):
        def fetch_page(start, end):
            if start >= 1000:
                raise httpx.ConnectError("down")
            return [{"id": i} for i in range(start, end + 1)]

        with pytest.raises(httpx.ConnectError):
            collect_all_pages(fetch_page, page_size=1000)

    @pytest.mark.parametrize("page_size", [0, -5])
    def test_rejects_non_positive_page_size(self, page_size):
        with pytest.raises(ValueError):
            collect_all_pages(lambda s, e: [], page_size=page_size)


class TestScanTable:
    def test_uses_inclusive_ranges_and_filters(self, make_db):
        db = make_db({"thieu_nhi": [{"id": str(i), "status": "ACTIVE" if i % 2 else "INACTIVE"} for i in range(25)]})

        rows = scan_table(db, "thieu_nhi", "id, status", filters={"status": "ACTIVE"}, page_size=5)

        assert len(rows) == 12
        assert all(r["status"] == "ACTIVE" for r in rows)
        assert db.range_requests("thieu_nhi") == [(0, 4), (5, 9), (10, 14)]

    def test_failure_after_first_page_raises(self, make_db):
        db = make_db({"thieu_nhi": [{"id": str(i)} for i in range(30)]}, fail_on=2)

        with pytest.raises(httpx.ConnectError):
            scan_table(db, "thieu_nhi", page_size=10)
