"""
Classes feature: API routes for class overview and statistics.
"""

from fastapi import APIRouter, Depends, status
from supabase import Client

from tntt_portal.core.dependencies import get_db
from tntt_portal.core.exceptions import NotFoundError, StoreUnavailableError, app_error_to_http
from tntt_portal.features.classes.service import ClassService

router = APIRouter()


@router.get("/overview")
async def get_overview(db: Client = Depends(get_db)):
    """Danh sách lớp kèm giáo lý viên và sĩ số."""
    service = ClassService(db)
    try:
        return service.get_overview().model_dump()
    except StoreUnavailableError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)


@router.get("/branches")
async def get_branch_stats(db: Client = Depends(get_db)):
    """Sĩ số thiếu nhi đang sinh hoạt theo ngành."""
    service = ClassService(db)
    try:
        return {"data": [b.model_dump() for b in service.get_branch_stats()]}
    except StoreUnavailableError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)


@router.get("/{class_id}/roster")
async def get_roster(class_id: str, db: Client = Depends(get_db)):
    """Danh sách thiếu nhi của một lớp."""
    service = ClassService(db)
    try:
        return service.get_roster(class_id).model_dump()
    except NotFoundError as e:
        raise app_error_to_http(e, status.HTTP_404_NOT_FOUND)
    except StoreUnavailableError as e:
        raise app_error_to_http(e, status.HTTP_503_SERVICE_UNAVAILABLE)
