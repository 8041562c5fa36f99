"""Custom exception classes and error handling."""

from typing import Any

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(
            status_code=status_code,
            detail={
                "success": False,
                "message": message,
                "error": {
                    "code": code,
                    "message": message,
                    "details": details or {},
                },
            },
        )


class FormatError(AppException):
    """Uploaded CSV is structurally unusable."""

    def __init__(
        self,
        message: str = "Invalid CSV format",
        missing_columns: list[str] | None = None,
    ):
        details = {}
        if missing_columns:
            details["missing_columns"] = missing_columns
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="CSV_FORMAT_ERROR",
            message=message,
            details=details,
        )


class ValidationError(AppException):
    """Data validation failed."""

    def __init__(
        self,
        message: str = "Validation error",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="VALIDATION_ERROR",
            message=message,
            details=details,
        )


class DuplicateExamTypeError(AppException):
    """A result already exists for this student, class code and exam type."""

    def __init__(self, roll_no: str, class_code: str, exam_type: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            code="DUPLICATE_EXAM_TYPE",
            message=(
                f'Exam type "{exam_type}" already exists for roll number '
                f"{roll_no} and class code {class_code}"
            ),
            details={
                "roll_no": roll_no,
                "class_code": class_code,
                "exam_type": exam_type,
            },
        )


class MaxExamTypesExceededError(AppException):
    """Student already has the maximum number of exam results for a class."""

    def __init__(self, roll_no: str, class_code: str, limit: int):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            code="MAX_EXAM_TYPES_EXCEEDED",
            message=(
                f"Maximum {limit} exam types allowed for roll number {roll_no} "
                f"and class code {class_code}"
            ),
            details={"roll_no": roll_no, "class_code": class_code, "limit": limit},
        )


class UploadError(AppException):
    """File upload failed."""

    def __init__(
        self,
        message: str = "Upload failed",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="UPLOAD_FAILED",
            message=message,
            details=details,
        )


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(
        self,
        resource: str = "Resource",
        identifier: str | None = None,
    ):
        details = {}
        if identifier:
            details["identifier"] = identifier
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            code="NOT_FOUND",
            message=f"{resource} not found",
            details=details,
        )


class StorageError(AppException):
    """Underlying database failure."""

    def __init__(
        self,
        message: str = "A database error occurred",
        error: Exception | str | None = None,
    ):
        details = {}
        if error is not None:
            details["error"] = str(error)
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code="STORAGE_ERROR",
            message=message,
            details=details,
        )
