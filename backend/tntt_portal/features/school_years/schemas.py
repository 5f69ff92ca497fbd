"""
School years feature: Schemas for the `school_years` table.
"""

from datetime import date
from pydantic import BaseModel, ValidationInfo, field_validator


class SchoolYear(BaseModel):
    """One row of `school_years`. Exactly one row is expected to be current."""
    id: str
    name: str = ""               # e.g. "2025 - 2026"
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False
    parish_name: str = ""        # e.g. "Giáo xứ Thiên Ân"
    total_weeks: int = 0         # Denominator for attendance normalization; 0 = not set
    status: str = "ACTIVE"

    # Rows created from the settings screen leave these columns null
    @field_validator("name", "is_current", "parish_name", "total_weeks", "status", mode="before")
    @classmethod
    def _null_to_default(cls, value, info: ValidationInfo):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value
