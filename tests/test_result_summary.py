"""Tests for the cross-exam summary."""

from decimal import Decimal
from itertools import permutations
from types import SimpleNamespace

from app.models.result import ResultStatus
from app.schemas.result import SubjectScore
from app.services.result_summary import subject_percentage, summarize_results, with_percentages


def exam(status: str, grade: str, *marks: tuple[int, int]) -> SimpleNamespace:
    return SimpleNamespace(
        result_status=ResultStatus(status),
        grade=grade,
        subjects=[SubjectScore(name=f"S{i}", marks=m, max_marks=mx) for i, (m, mx) in enumerate(marks)],
    )


def test_empty_input_returns_none():
    assert summarize_results([]) is None


def test_pass_and_fail_exams():
    rows = [exam("Pass", "A", (80, 100)), exam("Fail", "C", (30, 100))]

    summary = summarize_results(rows)

    assert summary.overall_percentage == Decimal("55.00")
    assert summary.overall_status == ResultStatus.FAIL
    assert summary.total_exams == 2
    assert summary.passed_exams == 1
    assert summary.failed_exams == 1


def test_all_passed_is_pass():
    rows = [exam("Pass", "A", (90, 100)), exam("Pass", "B", (60, 100))]

    summary = summarize_results(rows)

    assert summary.overall_status == ResultStatus.PASS
    assert summary.failed_exams == 0


def test_zero_max_marks_gives_zero_percentage():
    rows = [exam("Pass", "A", (0, 0)), exam("Pass", "A")]

    summary = summarize_results(rows)

    assert summary.overall_percentage == Decimal("0.00")


def test_exams_without_subjects_count_towards_totals():
    summary = summarize_results([exam("Pass", "A"), exam("Fail", "B", (45, 50))])

    assert summary.overall_percentage == Decimal("90.00")
    assert summary.total_exams == 2
    assert summary.passed_exams == 1


def test_percentage_rounds_to_two_places():
    summary = summarize_results([exam("Pass", "A", (2, 3))])

    assert summary.overall_percentage == Decimal("66.67")


def test_counts_and_percentage_do_not_depend_on_order():
    rows = [
        exam("Pass", "A", (88, 100), (72, 100)),
        exam("Fail", "D", (20, 100), (35, 50)),
        exam("Pass", "B+", (61, 80)),
    ]
    expected = summarize_results(rows)

    for ordering in permutations(rows):
        summary = summarize_results(list(ordering))
        assert summary.overall_percentage == expected.overall_percentage
        assert summary.total_exams == expected.total_exams
        assert summary.passed_exams == expected.passed_exams
        assert summary.failed_exams == expected.failed_exams
        assert summary.overall_status == expected.overall_status


def test_overall_grade_is_first_rows_grade():
    rows = [exam("Pass", "A", (88, 100)), exam("Fail", "D", (20, 100)), exam("Pass", "B+", (61, 100))]

    for ordering in permutations(rows):
        assert summarize_results(list(ordering)).overall_grade == ordering[0].grade


def test_blank_first_grade_falls_back_to_na():
    rows = [exam("Pass", "", (50, 100)), exam("Pass", "A", (90, 100))]

    assert summarize_results(rows).overall_grade == "N/A"


def test_missing_max_marks_counts_as_default():
    rows = [
        SimpleNamespace(
            result_status=ResultStatus.PASS,
            grade="A",
            subjects=[SimpleNamespace(name="Art", marks=45, max_marks=None)],
        )
    ]

    assert summarize_results(rows).overall_percentage == Decimal("45.00")


def test_summary_serializes_with_camel_case_keys():
    summary = summarize_results([exam("Pass", "A", (80, 100)), exam("Fail", "C", (30, 100))])

    data = summary.model_dump(by_alias=True, mode="json")

    assert data["overallPercentage"] == "55.00"
    assert data["overallStatus"] == "Fail"
    assert data["overallGrade"] == "A"
    assert set(data) == {
        "overallPercentage",
        "overallGrade",
        "overallStatus",
        "totalExams",
        "passedExams",
        "failedExams",
    }


def test_subject_percentage():
    assert subject_percentage(SubjectScore(name="Maths", marks=2, max_marks=3)) == Decimal("66.7")
    assert subject_percentage(SubjectScore(name="Maths", marks=45, max_marks=50)) == Decimal("90.0")
    assert subject_percentage(SubjectScore(name="Maths", marks=10, max_marks=0)) == Decimal("0.0")
    assert subject_percentage(SimpleNamespace(name="Art", marks=45, max_marks=None)) == Decimal("45.0")


def test_with_percentages_keeps_order():
    subjects = [SubjectScore(name="English", marks=72), SubjectScore(name="Maths", marks=88)]

    details = with_percentages(subjects)

    assert [d.name for d in details] == ["English", "Maths"]
    assert [d.percentage for d in details] == [Decimal("72.0"), Decimal("88.0")]
