"""
School years feature: Service layer for reading the current school year.
"""

import logging
from supabase import Client

from tntt_portal.config import get_settings
from tntt_portal.core.exceptions import STORE_ERRORS, SchoolYearNotConfiguredError, StoreUnavailableError
from tntt_portal.features.school_years.schemas import SchoolYear

logger = logging.getLogger(__name__)


class SchoolYearService:
    """Looks up the school year flagged `is_current`.

    The "exactly one current year" rule is enforced by the settings screen,
    not here; if several rows are flagged, the first one returned wins.
    """

    def __init__(self, db: Client):
        self.db = db
        self.settings = get_settings()

    def get_current(self) -> SchoolYear | None:
        """Return the current school year, or None if none is configured."""
        try:
            result = (
                self.db.table("school_years")
                .select("*")
                .eq("is_current", True)
                .limit(1)
                .execute()
            )
        except STORE_ERRORS as e:
            raise StoreUnavailableError("school_years", str(e)) from e

        if not result.data:
            logger.warning("⚠️ No current school year configured")
            return None
        return SchoolYear(**result.data[0])

    def require_current(self) -> SchoolYear:
        """Like `get_current`, but raise when nothing is configured."""
        year = self.get_current()
        if year is None:
            raise SchoolYearNotConfiguredError()
        return year

    def resolve_total_weeks(self, year: SchoolYear | None) -> int:
        """`total_weeks` of `year`, or DEFAULT_TOTAL_WEEKS if missing/zero."""
        if year and year.total_weeks > 0:
            return year.total_weeks
        return self.settings.DEFAULT_TOTAL_WEEKS
