"""
Students feature: API routes for derived metrics.
"""

from fastapi import APIRouter, Depends, status
from supabase import Client

from tntt_portal.core.dependencies import get_db
from tntt_portal.core.exceptions import NotFoundError, StoreUnavailableError, app_error_to_http
from tntt_portal.features.students.service import StudentService

router = APIRouter()


@router.get("/{student_id}/metrics")
async def get_metrics(student_id: str, db: Client = Depends(get_db)):
    """Điểm TB giáo lý, chuyên cần, tổng và xếp loại."""
    service = StudentService(db)
    try:
        return service.get_metrics(student_id).model_dump(mode="json")
    except NotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    except StoreUnavailableError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)


@router.get("/{student_id}/attendance-grid")
async def get_attendance_grid(student_id: str, db: Client = Depends(get_db)):
    """Lưới tuần tham dự Thánh lễ Thứ năm / Chúa nhật."""
    service = StudentService(db)
    try:
        return service.get_attendance_grid(student_id).model_dump()
    except NotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    except StoreUnavailableError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)
