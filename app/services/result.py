"""Exam result service for CRUD, lookup and bulk upload."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import (
    DuplicateExamTypeError,
    MaxExamTypesExceededError,
    NotFoundError,
    StorageError,
    UploadError,
    ValidationError,
)
from app.models.base import utcnow
from app.models.result import ExamResult, ExamType
from app.schemas.result import (
    ExamResultCreate,
    ExamResultDetail,
    ExamResultImport,
    ExamResultResponse,
    ExamResultUpdate,
    ResultUploadResponse,
    StudentResultHistory,
    is_valid_roll_no,
)
from app.services.result_csv import parse_results_csv
from app.services.result_summary import summarize_results, with_percentages

logger = logging.getLogger(__name__)

NEWEST_FIRST = (ExamResult.created_at.desc(), ExamResult.id.desc())


class ResultService:
    """Exam result management service."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def to_response(record: ExamResult) -> ExamResultResponse:
        """Convert ExamResult to response schema."""
        return ExamResultResponse.model_validate({
            "id": record.id,
            "student_name": record.student_name,
            "roll_no": record.roll_no,
            "class": record.class_name,
            "class_code": record.class_code,
            "exam_type": record.exam_type,
            "result_status": record.result_status,
            "grade": record.grade,
            "subjects": record.subjects or [],
            "created_at": record.created_at,
            "updated_at": record.updated_at,
        })

    # ==========================================
    # Queries
    # ==========================================

    def get_by_roll_and_class(self, roll_no: str, class_code: str) -> list[ExamResult] | None:
        """All results of one student in one class section, newest first.

        Returns None rather than an empty list when nothing matches.
        """
        result = self.db.execute(
            select(ExamResult)
            .where(ExamResult.roll_no == roll_no, ExamResult.class_code == class_code)
            .order_by(*NEWEST_FIRST)
        )
        records = list(result.scalars().all())
        return records or None

    def get_by_id(self, result_id: int) -> ExamResult | None:
        return self.db.get(ExamResult, result_id)

    def get_result(self, result_id: int) -> ExamResult:
        """Get exam result by ID."""
        record = self.get_by_id(result_id)
        if not record:
            raise NotFoundError("Result", str(result_id))
        return record

    def list_results(self) -> list[ExamResult]:
        result = self.db.execute(select(ExamResult).order_by(*NEWEST_FIRST))
        return list(result.scalars().all())

    def list_unique_students(self) -> list[ExamResult]:
        """Most recently created result per roll_no and class_code.

        This is a roster selection, not an aggregate: each entry is a stored
        row, ordered newest first by that row.
        """
        seen: set[tuple[str, str]] = set()
        students = []
        for record in self.list_results():
            key = (record.roll_no, record.class_code)
            if key not in seen:
                seen.add(key)
                students.append(record)
        return students

    def count_results(self) -> int:
        return self.db.execute(select(func.count()).select_from(ExamResult)).scalar() or 0

    def get_student_history(self, roll_no: str, class_code: str) -> StudentResultHistory:
        """Results of one student plus their summary across exams."""
        if not is_valid_roll_no(roll_no):
            raise ValidationError(
                "Roll Number must be exactly 6 digits",
                details={"fields": ["roll_no"]},
            )

        records = self.get_by_roll_and_class(roll_no, class_code)
        if records is None:
            raise NotFoundError("Result for the provided Roll Number and Class Code", f"{roll_no}/{class_code}")

        responses = [self.to_response(r) for r in records]
        details = [
            ExamResultDetail.model_validate({
                **r.model_dump(by_alias=True, exclude={"subjects"}),
                "subjects": with_percentages(r.subjects),
            })
            for r in responses
        ]
        first = responses[0]
        return StudentResultHistory(
            student_name=first.student_name,
            roll_no=first.roll_no,
            class_name=first.class_name,
            class_code=first.class_code,
            results=details,
            summary=summarize_results(responses),
        )

    # ==========================================
    # Writes
    # ==========================================

    def _check_exam_slots(
        self,
        roll_no: str,
        class_code: str,
        exam_type: ExamType,
        exclude_id: int | None = None,
    ) -> None:
        """Reject a duplicate exam type or a result beyond the per-student limit."""
        query = select(ExamResult).where(
            ExamResult.roll_no == roll_no,
            ExamResult.class_code == class_code,
        )
        if exclude_id is not None:
            query = query.where(ExamResult.id != exclude_id)
        existing = list(self.db.execute(query).scalars().all())

        if any(r.exam_type == exam_type for r in existing):
            raise DuplicateExamTypeError(roll_no, class_code, exam_type.value)
        if len(existing) >= settings.MAX_EXAM_TYPES_PER_STUDENT:
            raise MaxExamTypesExceededError(roll_no, class_code, settings.MAX_EXAM_TYPES_PER_STUDENT)

    @contextmanager
    def _unique_write(self, request: ExamResultCreate) -> Iterator[None]:
        """Savepoint around one write; a unique-constraint hit undoes only that write."""
        # The unique constraint catches writers that raced past _check_exam_slots
        try:
            with self.db.begin_nested():
                yield
        except IntegrityError:
            logger.warning(
                f"Duplicate exam type rejected by database: {request.roll_no}/{request.class_code}/{request.exam_type.value}"
            )
            raise DuplicateExamTypeError(request.roll_no, request.class_code, request.exam_type.value) from None

    def create_result(self, request: ExamResultCreate) -> ExamResultResponse:
        """Create a single exam result."""
        self._check_exam_slots(request.roll_no, request.class_code, request.exam_type)

        record = ExamResult(
            student_name=request.student_name,
            roll_no=request.roll_no,
            class_name=request.class_name,
            class_code=request.class_code,
            exam_type=request.exam_type,
            result_status=request.result_status,
            grade=request.grade,
            subjects=[s.model_dump() for s in request.subjects],
        )
        with self._unique_write(request):
            self.db.add(record)
        self.db.refresh(record)

        logger.info(f"Result created: id={record.id}, roll_no={record.roll_no}, exam={record.exam_type.value}")
        return self.to_response(record)

    def update_result(self, result_id: int, request: ExamResultUpdate) -> ExamResultResponse:
        """Replace every mutable field of an exam result."""
        record = self.get_result(result_id)
        self._check_exam_slots(request.roll_no, request.class_code, request.exam_type, exclude_id=record.id)

        with self._unique_write(request):
            record.student_name = request.student_name
            record.roll_no = request.roll_no
            record.class_name = request.class_name
            record.class_code = request.class_code
            record.exam_type = request.exam_type
            record.result_status = request.result_status
            record.grade = request.grade
            record.subjects = [s.model_dump() for s in request.subjects]
            record.updated_at = utcnow()
        self.db.refresh(record)

        logger.info(f"Result updated: id={record.id}")
        return self.to_response(record)

    def delete_result(self, result_id: int) -> None:
        """Delete an exam result."""
        record = self.get_result(result_id)
        self.db.delete(record)
        self.db.flush()
        logger.info(f"Result deleted: id={result_id}")

    def bulk_insert(self, records: list[ExamResultImport]) -> int:
        """
        Insert results as given.

        No per-student exam limit is applied here; only the database's
        unique constraint can reject a row, which fails the whole batch
        and leaves earlier work in the session untouched.
        """
        rows = [
            ExamResult(
                student_name=r.student_name,
                roll_no=r.roll_no,
                class_name=r.class_name,
                class_code=r.class_code,
                exam_type=r.exam_type,
                result_status=r.result_status,
                grade=r.grade,
                subjects=[s.model_dump() for s in r.subjects],
            )
            for r in records
        ]
        try:
            with self.db.begin_nested():
                self.db.add_all(rows)
        except IntegrityError as e:
            raise StorageError("Failed to save uploaded results", e.orig) from e
        return len(rows)

    # ==========================================
    # CSV Upload
    # ==========================================

    def import_csv(self, content: bytes, file_name: str | None = None) -> ResultUploadResponse:
        """Parse an uploaded CSV file and insert every result it describes.

        Format and validation errors are raised before anything is written.
        """
        logger.info(f"[RESULT UPLOAD] Starting upload for file: {file_name or '<request body>'}")
        logger.debug(f"[RESULT UPLOAD] File size: {len(content)} bytes")

        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise UploadError("CSV file must be UTF-8 encoded") from None

        template, records = parse_results_csv(text)
        count = self.bulk_insert(records)

        logger.info(f"[RESULT UPLOAD] Upload complete - {count} results from {template.value} template")
        return ResultUploadResponse(
            count=count,
            template=template,
            message=f"Successfully uploaded {count} results",
        )
