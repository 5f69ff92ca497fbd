"""
Custom exception classes for unified error handling.
"""

import httpx
from fastapi import HTTPException
from postgrest.exceptions import APIError


class AppBaseError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class StoreUnavailableError(AppBaseError):
    """Raised when a store request fails (unreachable, timeout, API error).

    A failed scan means "counts unknown", never "counts understated".
    """
    def __init__(self, table: str, original_error: str):
        super().__init__(
            message=f"Không đọc được dữ liệu bảng '{table}'",
            detail=original_error,
        )


class NotFoundError(AppBaseError):
    """Raised when a requested student/class does not exist."""
    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            message=f"Không tìm thấy {entity}",
            detail=f"id={entity_id}",
        )


class SchoolYearNotConfiguredError(AppBaseError):
    """Raised when no school year is marked as current."""
    def __init__(self):
        super().__init__(
            message="Chưa có năm học hiện tại",
            detail="Vui lòng vào Cài đặt > Năm học để tạo năm học.",
        )


# ── Utility: convert to HTTPException ────────────────────

def app_error_to_http(error: AppBaseError, status_code: int = 400) -> HTTPException:
    """Convert an AppBaseError to an HTTPException with consistent JSON body."""
    return HTTPException(
        status_code=status_code,
        detail={
            "error": error.message,
            "detail": error.detail,
            "type": type(error).__name__,
        },
    )


# Errors a Supabase call can raise (PostgREST error body or transport failure)
STORE_ERRORS: tuple[type[Exception], ...] = (APIError, httpx.HTTPError)
