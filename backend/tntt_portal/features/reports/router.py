"""
Reports feature: API routes for exportable report tables.
"""

from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from tntt_portal.core.dependencies import get_db
from tntt_portal.core.exceptions import NotFoundError, StoreUnavailableError, app_error_to_http
from tntt_portal.features.reports.schemas import AttendanceReportRequest, ScoreReportRequest
from tntt_portal.features.reports.service import ReportService

router = APIRouter()


@router.post("/attendance")
async def build_attendance_report(
    data: AttendanceReportRequest,
    db: Client = Depends(get_db),
):
    """Bảng điểm danh Thánh lễ của một lớp trong khoảng ngày."""
    service = ReportService(db)
    try:
        report = service.build_attendance(data.class_id, data.from_date, data.to_date, data.day_type)
        return report.model_dump()
    except NotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    except StoreUnavailableError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)


@router.post("/score")
async def build_score_report(
    data: ScoreReportRequest,
    db: Client = Depends(get_db),
):
    """Bảng điểm giáo lý của một lớp (chọn cột; không chọn = tất cả)."""
    service = ReportService(db)
    try:
        report = service.build_score(data.class_id, data.score_columns)
        return report.model_dump()
    except NotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    except StoreUnavailableError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)


@router.get("/attendance-tally")
async def get_attendance_tally(
    from_date: date,
    to_date: date,
    day_type: Literal["thu5", "cn"] | None = None,
    db: Client = Depends(get_db),
):
    """Số buổi có mặt của từng thiếu nhi trong khoảng ngày."""
    if to_date < from_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="from_date phải trước to_date",
        )
    service = ReportService(db)
    try:
        tally = service.attendance_tally(from_date, to_date, day_type)
        return {"data": tally.counts, "students_counted": len(tally.counts), "sessions": tally.with_key}
    except StoreUnavailableError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)


@router.get("/attendance-trend")
async def get_attendance_trend(
    day_type: Literal["thu5", "cn"] = "cn",
    weeks: int = 3,
    db: Client = Depends(get_db),
):
    """Sĩ số tham dự theo ngành trong các buổi lễ gần nhất."""
    service = ReportService(db)
    try:
        return service.attendance_trend(day_type, weeks).model_dump(mode="json")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailableError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)
