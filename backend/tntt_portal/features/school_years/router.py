"""
School years feature: API routes.
"""

from fastapi import APIRouter, Depends, status
from supabase import Client

from tntt_portal.core.dependencies import get_db
from tntt_portal.core.exceptions import (
    SchoolYearNotConfiguredError,
    StoreUnavailableError,
    app_error_to_http,
)
from tntt_portal.features.school_years.calendar import calculate_total_weeks
from tntt_portal.features.school_years.service import SchoolYearService

router = APIRouter()


@router.get("/current")
async def get_current_school_year(db: Client = Depends(get_db)):
    """Năm học hiện tại, kèm số tuần tính từ ngày bắt đầu/kết thúc."""
    service = SchoolYearService(db)
    try:
        year = service.require_current()
    except SchoolYearNotConfiguredError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    except StoreUnavailableError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)

    return {
        "data": year.model_dump(mode="json"),
        "calculated_weeks": calculate_total_weeks(year.start_date, year.end_date),
    }
