"""CSV parsing and grouping for bulk result upload.

Two header shapes are accepted:

- basic:    student_name,roll_no,class,class_code,result_status,grade
- complete: basic columns plus subject,marks (one row per subject)

Values are split on plain commas; quoted fields are not supported, so a
comma inside a value breaks that row. Rows whose value count differs from
the header are skipped. The complete template also accepts an optional
``max_marks`` column; subjects without one are stored with the default
maximum. Either template may carry an optional ``exam_type`` column.
"""

import logging
import re
from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.exceptions import FormatError, ValidationError
from app.models.result import ExamType, ResultStatus
from app.schemas.result import CsvTemplate, ExamResultImport, SubjectScore, is_valid_roll_no

logger = logging.getLogger(__name__)

BASIC_COLUMNS = ["student_name", "roll_no", "class", "class_code", "result_status", "grade"]
SUBJECT_COLUMNS = ["subject", "marks"]
COMPLETE_COLUMNS = BASIC_COLUMNS + SUBJECT_COLUMNS

# Columns that must be non-blank on every data row
IDENTITY_COLUMNS = ["student_name", "class", "class_code"]

INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


@dataclass
class CsvRow:
    """One data row with its 1-based line number in the file."""

    line: int
    values: dict[str, str]


@dataclass
class ParsedCsv:
    template: CsvTemplate
    headers: list[str]
    rows: list[CsvRow]


def detect_template(headers: list[str]) -> CsvTemplate:
    if all(col in headers for col in SUBJECT_COLUMNS):
        return CsvTemplate.COMPLETE
    return CsvTemplate.BASIC


def required_columns(template: CsvTemplate) -> list[str]:
    return COMPLETE_COLUMNS if template == CsvTemplate.COMPLETE else BASIC_COLUMNS


def parse_int(value: str, default: int) -> int:
    """Parse a leading integer ("85.5" -> 85); blank or junk gives default."""
    match = INT_PREFIX.match(value or "")
    if not match:
        return default
    return int(match.group(1))


def parse_csv(text: str) -> ParsedCsv:
    """
    Split CSV text into header and data rows and check the header.

    Raises FormatError when there are no data rows or when required columns
    are missing (all of them are listed). Roll numbers are checked per row;
    the first bad one raises ValidationError with its line number.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = [
        (number, line)
        for number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
    if len(lines) <= 1:
        raise FormatError("CSV file is empty or invalid")

    headers = [h.strip() for h in lines[0][1].split(",")]
    template = detect_template(headers)

    missing = [col for col in required_columns(template) if col not in headers]
    if missing:
        raise FormatError(
            f"Missing required columns: {', '.join(missing)}",
            missing_columns=missing,
        )

    rows: list[CsvRow] = []
    for number, line in lines[1:]:
        values = [v.strip() for v in line.split(",")]
        if len(values) != len(headers):
            logger.debug(f"[RESULT CSV] Skipping line {number}: expected {len(headers)} values, got {len(values)}")
            continue

        row = dict(zip(headers, values))
        roll_no = row.get("roll_no", "")
        if not is_valid_roll_no(roll_no):
            raise ValidationError(
                f'Invalid roll number "{roll_no}" on line {number}. Must be 6 digits.',
                details={"line": number, "column": "roll_no", "value": roll_no},
            )
        rows.append(CsvRow(line=number, values=row))

    logger.info(f"[RESULT CSV] Parsed {len(rows)} data rows ({template.value} template)")
    return ParsedCsv(template=template, headers=headers, rows=rows)


def _row_error(row: CsvRow, message: str, column: str | None = None, value: str | None = None) -> ValidationError:
    details = {"line": row.line}
    if column:
        details["column"] = column
        details["value"] = value
    return ValidationError(f"{message} on line {row.line}", details=details)


def _check_identity(row: CsvRow) -> None:
    blank = [col for col in IDENTITY_COLUMNS if not row.values.get(col)]
    if blank:
        raise ValidationError(
            f"Missing values for {', '.join(blank)} on line {row.line}",
            details={"line": row.line, "fields": blank},
        )


def _status(row: CsvRow) -> ResultStatus:
    value = row.values.get("result_status", "")
    try:
        return ResultStatus.from_string(value)
    except ValueError:
        raise _row_error(row, f'Invalid result status "{value}"', "result_status", value) from None


def _exam_type(row: CsvRow) -> ExamType | None:
    value = row.values.get("exam_type", "")
    if not value:
        return None
    try:
        return ExamType.from_string(value)
    except ValueError:
        raise _row_error(row, f'Invalid exam type "{value}"', "exam_type", value) from None


def _subject(row: CsvRow) -> SubjectScore | None:
    name = row.values.get("subject", "")
    raw_marks = row.values.get("marks", "")
    if not name or not raw_marks:
        return None

    marks = parse_int(raw_marks, 0)
    max_marks = parse_int(row.values.get("max_marks", ""), settings.DEFAULT_MAX_MARKS)
    if marks < 0 or max_marks < 0:
        raise _row_error(row, "Marks cannot be negative", "marks", raw_marks)
    try:
        return SubjectScore(name=name, marks=marks, max_marks=max_marks)
    except PydanticValidationError:
        raise _row_error(row, f'Invalid subject "{name}"', "subject", name) from None


def _start_record(row: CsvRow) -> ExamResultImport:
    _check_identity(row)
    try:
        return ExamResultImport(
            student_name=row.values["student_name"],
            roll_no=row.values["roll_no"],
            class_name=row.values["class"],
            class_code=row.values["class_code"],
            exam_type=_exam_type(row),
            result_status=_status(row),
            grade=row.values.get("grade") or None,
            subjects=[],
        )
    except PydanticValidationError as e:
        fields = [str(err["loc"][0]) for err in e.errors() if err.get("loc")]
        raise ValidationError(
            f"Invalid values for {', '.join(fields)} on line {row.line}",
            details={"line": row.line, "fields": fields},
        ) from None


def group_rows(parsed: ParsedCsv) -> list[ExamResultImport]:
    """
    Build one result per student from parsed rows.

    Basic rows map one-to-one to results with no subjects. Complete rows are
    merged per roll_no and class_code (and exam_type when that column is
    present); the first row of a group supplies the student fields and
    every row with a subject and marks adds one subject, in file order.
    """
    if parsed.template == CsvTemplate.BASIC:
        return [_start_record(row) for row in parsed.rows]

    keyed_by_exam = "exam_type" in parsed.headers
    groups: dict[str, ExamResultImport] = {}
    for row in parsed.rows:
        key = f"{row.values['roll_no']}-{row.values['class_code']}"
        if keyed_by_exam:
            exam_type = _exam_type(row)
            key = f"{key}-{exam_type.value if exam_type else ''}"

        record = groups.get(key)
        if record is None:
            record = groups[key] = _start_record(row)

        subject = _subject(row)
        if subject is not None:
            record.subjects.append(subject)

    return list(groups.values())


def parse_results_csv(text: str) -> tuple[CsvTemplate, list[ExamResultImport]]:
    """Parse and group CSV text into results ready for bulk insert."""
    parsed = parse_csv(text)
    return parsed.template, group_rows(parsed)
