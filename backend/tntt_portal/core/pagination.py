"""
Full-table scans over Supabase/PostgREST.

PostgREST caps every response at `max-rows` (1000 on Supabase by default),
so a plain `select` silently truncates large tables. `collect_all_pages`
walks fixed-size pages until the store returns a short (or empty) page.

Pages are requested strictly one after another. If the table is written to
while a scan is running, rows may be skipped or returned twice depending on
the store's ordering; pass `order_by` to make the page boundaries stable.
"""

import logging
from typing import Callable

from supabase import Client

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000

# fetch_page(start, end) -> rows, with `end` inclusive like PostgREST's Range header
PageFetcher = Callable[[int, int], list[dict]]


def collect_all_pages(fetch_page: PageFetcher, page_size: int = DEFAULT_PAGE_SIZE) -> list[dict]:
    """Fetch every row by requesting `[offset, offset + page_size)` until exhaustion.

    Args:
        fetch_page: Called with an inclusive `(start, end)` row range.
        page_size: Rows per request. Must match or stay below the store cap,
            otherwise a capped page looks like the last one.

    Returns:
        All rows, page order preserved.

    Raises:
        ValueError: If `page_size` is not positive.
        Exception: Whatever `fetch_page` raises. Nothing collected so far is
            returned; callers must treat the scan as failed.
    """
    if page_size <= 0:
        raise ValueError(f"page_size phải > 0 (nhận {page_size})")

    rows: list[dict] = []
    offset = 0
    requests = 0

    while True:
        start, end = offset, offset + page_size - 1
        requests += 1
        try:
            page = fetch_page(start, end) or []
        except Exception as e:
            logger.error(f"❌ Scan aborted at rows {start}-{end} (request #{requests}): {e}")
            raise

        logger.debug(f"Page #{requests} [{start}-{end}]: {len(page)} rows")
        rows.extend(page)

        if len(page) < page_size:
            break
        offset += page_size

    logger.info(f"📄 Full scan done: {len(rows)} rows in {requests} requests")
    return rows


def scan_table(
    db: Client,
    table: str,
    columns: str = "*",
    filters: dict | None = None,
    order_by: str | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[dict]:
    """Select every row of `table` matching equality `filters`.

    Example:
        scan_table(db, "thieu_nhi", "id, class_id", {"status": "ACTIVE"})
    """

    def fetch_page(start: int, end: int) -> list[dict]:
        query = db.table(table).select(columns)
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        if order_by:
            query = query.order(order_by)
        result = query.range(start, end).execute()
        return result.data or []

    return collect_all_pages(fetch_page, page_size=page_size)
