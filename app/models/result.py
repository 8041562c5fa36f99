"""Exam result model."""

import enum
from typing import Any

from sqlalchemy import JSON, Enum, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.models.base import IDMixin, TimestampMixin


class ExamType(str, enum.Enum):
    """Exam labels allowed per academic year."""

    QUARTERLY = "Quarterly"
    HALF_YEARLY = "Half-yearly"
    ANNUAL = "Annual"

    @classmethod
    def from_string(cls, value: str) -> "ExamType":
        """Convert string to ExamType, ignoring case and separators."""
        normalized = value.strip().lower().replace(" ", "").replace("-", "").replace("_", "")
        mapping = {
            "quarterly": cls.QUARTERLY,
            "halfyearly": cls.HALF_YEARLY,
            "annual": cls.ANNUAL,
        }
        if normalized in mapping:
            return mapping[normalized]
        raise ValueError(f"Invalid exam type: {value}")


class ResultStatus(str, enum.Enum):
    """Pass/fail outcome of one exam."""

    PASS = "Pass"
    FAIL = "Fail"

    @classmethod
    def from_string(cls, value: str) -> "ResultStatus":
        """Convert string to ResultStatus; blank means Pass."""
        value = value.strip().upper()
        if not value:
            return cls.PASS
        mapping = {
            "P": cls.PASS,
            "PASS": cls.PASS,
            "F": cls.FAIL,
            "FAIL": cls.FAIL,
        }
        if value in mapping:
            return mapping[value]
        raise ValueError(f"Invalid result status: {value}")


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class ExamResult(Base, IDMixin, TimestampMixin):
    """One exam's result for a student in a class section."""

    __tablename__ = "results"

    student_name: Mapped[str] = mapped_column(String(255), nullable=False)
    roll_no: Mapped[str] = mapped_column(String(6), nullable=False, index=True)
    class_name: Mapped[str] = mapped_column("class", String(50), nullable=False)  # 'class' is reserved keyword
    class_code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    # NULL for CSV rows, which carry no exam type
    exam_type: Mapped[ExamType | None] = mapped_column(
        Enum(ExamType, name="exam_type", values_callable=_enum_values),
        nullable=True,
    )
    result_status: Mapped[ResultStatus] = mapped_column(
        Enum(ResultStatus, name="result_status", values_callable=_enum_values),
        nullable=False,
        default=ResultStatus.PASS,
    )
    grade: Mapped[str | None] = mapped_column(String(10), nullable=True)
    subjects: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=False,
        default=list,
    )

    __table_args__ = (
        UniqueConstraint(
            "roll_no", "class_code", "exam_type",
            name="uq_results_roll_class_exam",
        ),
    )

    def __repr__(self) -> str:
        return f"<ExamResult(roll_no={self.roll_no}, class_code={self.class_code}, exam={self.exam_type})>"
