"""Tests for CSV parsing, validation and grouping."""

import pytest

from app.core.exceptions import FormatError, ValidationError
from app.models.result import ExamType, ResultStatus
from app.schemas.result import CsvTemplate, is_valid_roll_no
from app.services.result_csv import parse_csv, parse_int, parse_results_csv

BASIC_HEADER = "student_name,roll_no,class,class_code,result_status,grade"
COMPLETE_HEADER = "student_name,roll_no,class,class_code,result_status,grade,subject,marks"


def csv_text(*lines: str) -> str:
    return "\n".join(lines) + "\n"


@pytest.mark.parametrize("value", ["100234", "000000", "999999"])
def test_valid_roll_numbers(value):
    assert is_valid_roll_no(value)


@pytest.mark.parametrize(
    "value",
    ["", "12345", "1234567", "12a456", " 12345", "12345 ", "12.345", "-12345", "١٢٣٤٥٦", None, 123456],
)
def test_invalid_roll_numbers(value):
    assert not is_valid_roll_no(value)


def test_basic_template_single_row():
    template, records = parse_results_csv(csv_text(BASIC_HEADER, "Asha,100234,Class 5,C5A,Pass,A"))

    assert template == CsvTemplate.BASIC
    assert len(records) == 1
    record = records[0]
    assert record.student_name == "Asha"
    assert record.roll_no == "100234"
    assert record.class_name == "Class 5"
    assert record.class_code == "C5A"
    assert record.result_status == ResultStatus.PASS
    assert record.grade == "A"
    assert record.exam_type is None
    assert record.subjects == []


def test_basic_template_keeps_one_record_per_row():
    _, records = parse_results_csv(csv_text(
        BASIC_HEADER,
        "Asha,100234,Class 5,C5A,Pass,A",
        "Asha,100234,Class 5,C5A,Fail,C",
    ))

    assert len(records) == 2
    assert [r.result_status for r in records] == [ResultStatus.PASS, ResultStatus.FAIL]


def test_complete_template_groups_subject_rows():
    template, records = parse_results_csv(csv_text(
        COMPLETE_HEADER,
        "Asha,100234,Class 5,C5A,Pass,A,Mathematics,88",
        "Asha,100234,Class 5,C5A,Pass,A,English,72",
    ))

    assert template == CsvTemplate.COMPLETE
    assert len(records) == 1
    subjects = records[0].subjects
    assert [s.name for s in subjects] == ["Mathematics", "English"]
    assert [s.marks for s in subjects] == [88, 72]
    assert [s.max_marks for s in subjects] == [100, 100]


def test_complete_template_groups_by_roll_and_class_code_in_first_seen_order():
    _, records = parse_results_csv(csv_text(
        COMPLETE_HEADER,
        "Ravi,200001,Class 6,C6B,Pass,B,Science,70",
        "Asha,100234,Class 5,C5A,Pass,A,Mathematics,88",
        "Ravi,200001,Class 6,C6B,Pass,B,Hindi,65",
        "Ravi,200001,Class 6,C6A,Fail,D,Science,20",
    ))

    assert [(r.roll_no, r.class_code) for r in records] == [
        ("200001", "C6B"),
        ("100234", "C5A"),
        ("200001", "C6A"),
    ]
    assert [s.name for s in records[0].subjects] == ["Science", "Hindi"]


def test_first_row_of_a_group_supplies_student_fields():
    _, records = parse_results_csv(csv_text(
        COMPLETE_HEADER,
        "Asha,100234,Class 5,C5A,,A,Mathematics,88",
        "Asha V,100234,Class 5,C5A,Fail,B,English,72",
    ))

    assert records[0].student_name == "Asha"
    assert records[0].result_status == ResultStatus.PASS
    assert records[0].grade == "A"


def test_rows_without_subject_or_marks_add_no_subject():
    _, records = parse_results_csv(csv_text(
        COMPLETE_HEADER,
        "Asha,100234,Class 5,C5A,Pass,A,,",
        "Asha,100234,Class 5,C5A,Pass,A,English,",
        "Asha,100234,Class 5,C5A,Pass,A,Mathematics,91",
    ))

    assert [s.name for s in records[0].subjects] == ["Mathematics"]


def test_marks_parse_like_integers():
    _, records = parse_results_csv(csv_text(
        COMPLETE_HEADER,
        "Asha,100234,Class 5,C5A,Pass,A,Mathematics,85.5",
        "Asha,100234,Class 5,C5A,Pass,A,English,absent",
    ))

    assert [s.marks for s in records[0].subjects] == [85, 0]


def test_negative_marks_are_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_results_csv(csv_text(COMPLETE_HEADER, "Asha,100234,Class 5,C5A,Pass,A,Mathematics,-5"))

    assert exc_info.value.details["line"] == 2


def test_optional_max_marks_column():
    _, records = parse_results_csv(csv_text(
        COMPLETE_HEADER + ",max_marks",
        "Asha,100234,Class 5,C5A,Pass,A,Mathematics,45,50",
        "Asha,100234,Class 5,C5A,Pass,A,English,72,",
    ))

    assert [s.max_marks for s in records[0].subjects] == [50, 100]


def test_optional_exam_type_column_separates_exams():
    _, records = parse_results_csv(csv_text(
        COMPLETE_HEADER + ",exam_type",
        "Asha,100234,Class 5,C5A,Pass,A,Mathematics,88,Quarterly",
        "Asha,100234,Class 5,C5A,Pass,A,Mathematics,91,Half-yearly",
    ))

    assert [r.exam_type for r in records] == [ExamType.QUARTERLY, ExamType.HALF_YEARLY]


def test_exam_type_grouping_ignores_case():
    _, records = parse_results_csv(csv_text(
        COMPLETE_HEADER + ",exam_type",
        "Asha,100234,Class 5,C5A,Pass,A,Mathematics,88,Annual",
        "Asha,100234,Class 5,C5A,Pass,A,English,72,annual",
    ))

    assert len(records) == 1
    assert records[0].exam_type == ExamType.ANNUAL
    assert [s.name for s in records[0].subjects] == ["Mathematics", "English"]


def test_invalid_exam_type_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_results_csv(csv_text(BASIC_HEADER + ",exam_type", "Asha,100234,Class 5,C5A,Pass,A,Weekly"))

    assert "Weekly" in exc_info.value.message


def test_invalid_result_status_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_results_csv(csv_text(BASIC_HEADER, "Asha,100234,Class 5,C5A,Distinction,A"))

    assert "line 2" in exc_info.value.message


def test_missing_grade_column():
    with pytest.raises(FormatError) as exc_info:
        parse_csv(csv_text(
            "student_name,roll_no,class,class_code,result_status",
            "Asha,100234,Class 5,C5A,Pass",
        ))

    assert "grade" in exc_info.value.message
    assert exc_info.value.details["missing_columns"] == ["grade"]


def test_every_missing_column_is_listed():
    with pytest.raises(FormatError) as exc_info:
        parse_csv(csv_text("student_name,roll_no,class", "Asha,100234,Class 5"))

    assert exc_info.value.details["missing_columns"] == ["class_code", "result_status", "grade"]


def test_complete_template_requires_basic_columns_too():
    with pytest.raises(FormatError) as exc_info:
        parse_csv(csv_text("student_name,roll_no,subject,marks", "Asha,100234,Maths,80"))

    assert exc_info.value.details["missing_columns"] == ["class", "class_code", "result_status", "grade"]


@pytest.mark.parametrize("text", ["", "\n\n", BASIC_HEADER, BASIC_HEADER + "\n\n  \n"])
def test_file_without_data_rows(text):
    with pytest.raises(FormatError):
        parse_csv(text)


def test_invalid_roll_number_reports_line():
    with pytest.raises(ValidationError) as exc_info:
        parse_csv(csv_text(
            BASIC_HEADER,
            "Asha,100234,Class 5,C5A,Pass,A",
            "Ravi,12345,Class 5,C5A,Pass,B",
        ))

    assert "12345" in exc_info.value.message
    assert "line 3" in exc_info.value.message
    assert exc_info.value.details["line"] == 3


def test_rows_with_wrong_value_count_are_skipped():
    parsed = parse_csv(csv_text(
        BASIC_HEADER,
        "Asha,100234,Class 5,C5A,Pass,A",
        "Verma, Ravi,200001,Class 5,C5A,Pass,B",
        "Meena,300001,Class 5,C5A,Pass",
    ))

    assert len(parsed.rows) == 1
    assert parsed.rows[0].values["student_name"] == "Asha"


def test_crlf_line_endings_and_bom():
    text = "\ufeff" + BASIC_HEADER + "\r\n" + "Asha,100234,Class 5,C5A,Pass,A\r\n"

    template, records = parse_results_csv(text)

    assert template == CsvTemplate.BASIC
    assert records[0].grade == "A"


def test_blank_identity_values_are_listed_together():
    with pytest.raises(ValidationError) as exc_info:
        parse_results_csv(csv_text(BASIC_HEADER, ",100234,,C5A,Pass,A"))

    assert exc_info.value.details["fields"] == ["student_name", "class"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [("85", 85), ("85.5", 85), (" 7", 7), ("+3", 3), ("-2", -2), ("", 100), ("abc", 100)],
)
def test_parse_int(value, expected):
    assert parse_int(value, 100) == expected
