"""
Classes feature: Schemas for classes, rosters and tallies.
"""

from pydantic import BaseModel, ValidationInfo, field_validator

from tntt_portal.features.students.schemas import StudentRecord

# Ngành (branches), in display order
BRANCHES = ["Chiên Con", "Ấu Nhi", "Thiếu Nhi", "Nghĩa Sĩ"]


class ClassInfo(BaseModel):
    """A row of `classes`. Null columns fall back to the defaults below."""
    id: str
    name: str = ""
    branch: str = ""
    display_order: int = 0
    status: str = "ACTIVE"

    @field_validator("name", "branch", "display_order", "status", mode="before")
    @classmethod
    def _null_to_default(cls, value, info: ValidationInfo):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class TallyResult(BaseModel):
    """Occurrence counts per foreign-key value.

    `with_key`/`without_key` are diagnostics: rows lacking the key never
    land in `counts`.
    """
    counts: dict[str, int] = {}
    with_key: int = 0
    without_key: int = 0

    @property
    def total(self) -> int:
        return self.with_key + self.without_key


class ClassOverviewItem(ClassInfo):
    """A class with its teachers and student count."""
    teachers: list[str] = []
    student_count: int = 0


class ClassOverviewResponse(BaseModel):
    """Response for GET /classes/overview."""
    classes: list[ClassOverviewItem]
    total_students: int
    students_with_class: int
    students_without_class: int


class BranchCount(BaseModel):
    """Active students in one branch."""
    branch: str
    student_count: int


class ClassRoster(BaseModel):
    """A class plus its students, ordered by full name."""
    class_info: ClassInfo
    students: list[StudentRecord]
