"""Exam result schemas."""

import enum
import re
from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_validator

from app.core.config import settings
from app.models.result import ExamType, ResultStatus
from app.schemas.common import BaseSchema


# ==========================================
# Roll Numbers
# ==========================================

# ASCII digits only; \d would also accept other Unicode digits
ROLL_NO_PATTERN = re.compile(r"[0-9]{6}")


def is_valid_roll_no(value: object) -> bool:
    """Return True if value is exactly six ASCII digits."""
    return isinstance(value, str) and ROLL_NO_PATTERN.fullmatch(value) is not None


def check_roll_no(value: str) -> str:
    if not is_valid_roll_no(value):
        raise ValueError("Roll Number must be exactly 6 digits")
    return value


# ==========================================
# Subjects
# ==========================================

class SubjectScore(BaseSchema):
    """Marks for one subject within an exam."""

    name: str = Field(..., min_length=1, max_length=100)
    marks: int = Field(..., ge=0)
    max_marks: int = Field(settings.DEFAULT_MAX_MARKS, ge=0)


class SubjectScoreDetail(SubjectScore):
    """Subject marks with the percentage shown in detail views."""

    percentage: Decimal


# ==========================================
# Exam Result Schemas
# ==========================================

class ExamResultBase(BaseSchema):
    """Fields shared by every exam result payload."""

    student_name: str = Field(..., min_length=1, max_length=255)
    roll_no: str = Field(..., description="Exactly 6 digits")
    class_name: str = Field(..., alias="class", min_length=1, max_length=50)
    class_code: str = Field(..., min_length=1, max_length=50)
    result_status: ResultStatus = ResultStatus.PASS
    grade: str | None = Field(None, max_length=10)

    @field_validator("roll_no")
    @classmethod
    def validate_roll_no(cls, v: str) -> str:
        return check_roll_no(v)


class ExamResultCreate(ExamResultBase):
    """Manual entry of one exam result."""

    exam_type: ExamType
    grade: str = Field(..., min_length=1, max_length=10)
    subjects: list[SubjectScore] = Field(..., min_length=1)


class ExamResultUpdate(ExamResultCreate):
    """Full replacement of an exam result's mutable fields."""

    pass


class ExamResultImport(ExamResultBase):
    """Exam result produced by CSV ingestion."""

    exam_type: ExamType | None = None
    subjects: list[SubjectScore] = []


class ExamResultResponse(ExamResultBase):
    """Exam result response schema."""

    id: int
    exam_type: ExamType | None
    subjects: list[SubjectScore]
    created_at: datetime
    updated_at: datetime


class ExamResultDetail(ExamResultResponse):
    """Exam result with per-subject percentages."""

    subjects: list[SubjectScoreDetail]


# ==========================================
# Aggregation
# ==========================================

class ResultSummary(BaseSchema):
    """Summary across every exam of one student in one class section."""

    overall_percentage: Decimal = Field(..., alias="overallPercentage")
    overall_grade: str = Field(..., alias="overallGrade")
    overall_status: ResultStatus = Field(..., alias="overallStatus")
    total_exams: int = Field(..., alias="totalExams")
    passed_exams: int = Field(..., alias="passedExams")
    failed_exams: int = Field(..., alias="failedExams")


class StudentResultHistory(BaseSchema):
    """All exam results of one student in one class section."""

    student_name: str
    roll_no: str
    class_name: str = Field(..., alias="class")
    class_code: str
    results: list[ExamResultDetail]
    summary: ResultSummary


# ==========================================
# CSV Upload
# ==========================================

class CsvTemplate(str, enum.Enum):
    """Supported CSV shapes for bulk result upload."""

    BASIC = "basic"
    COMPLETE = "complete"


class ResultUploadResponse(BaseSchema):
    """Result of a CSV bulk upload."""

    count: int
    template: CsvTemplate
    message: str
