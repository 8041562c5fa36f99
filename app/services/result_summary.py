"""Aggregation of a student's exam results within one class section.

Everything here is pure: no database access, no clock, no logging. The
functions accept any objects exposing ``subjects``, ``result_status`` and
``grade`` (ORM rows go through ``ResultService.to_response`` first).
"""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from app.core.config import settings
from app.models.result import ResultStatus
from app.schemas.result import ResultSummary, SubjectScore, SubjectScoreDetail

TWO_PLACES = Decimal("0.01")
ONE_PLACE = Decimal("0.1")


def _max_marks(subject) -> int:
    max_marks = getattr(subject, "max_marks", None)
    return settings.DEFAULT_MAX_MARKS if max_marks is None else max_marks


def subject_percentage(subject: SubjectScore) -> Decimal:
    """Percentage for one subject, one decimal place."""
    max_marks = _max_marks(subject)
    if max_marks == 0:
        return Decimal("0.0")
    return (Decimal(subject.marks) * 100 / Decimal(max_marks)).quantize(ONE_PLACE, ROUND_HALF_UP)


def with_percentages(subjects: Sequence[SubjectScore]) -> list[SubjectScoreDetail]:
    return [
        SubjectScoreDetail(
            name=s.name,
            marks=s.marks,
            max_marks=_max_marks(s),
            percentage=subject_percentage(s),
        )
        for s in subjects
    ]


def summarize_results(rows: Sequence) -> ResultSummary | None:
    """
    Summarize all exam rows of one student in one class section.

    Returns None for an empty input. The overall percentage is the total of
    marks over the total of max marks across every subject of every exam.
    The overall grade is the grade of the first row as given; it is not
    derived from the other rows.
    """
    if not rows:
        return None

    total_marks = 0
    total_max_marks = 0
    for row in rows:
        for subject in row.subjects or []:
            total_marks += subject.marks
            total_max_marks += _max_marks(subject)

    if total_max_marks > 0:
        overall_percentage = (
            Decimal(total_marks) * 100 / Decimal(total_max_marks)
        ).quantize(TWO_PLACES, ROUND_HALF_UP)
    else:
        overall_percentage = Decimal("0.00")

    total_exams = len(rows)
    passed_exams = sum(1 for row in rows if row.result_status == ResultStatus.PASS)

    return ResultSummary(
        overall_percentage=overall_percentage,
        overall_grade=rows[0].grade or "N/A",
        overall_status=ResultStatus.PASS if passed_exams == total_exams else ResultStatus.FAIL,
        total_exams=total_exams,
        passed_exams=passed_exams,
        failed_exams=total_exams - passed_exams,
    )
