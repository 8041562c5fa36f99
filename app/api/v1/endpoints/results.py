"""Exam result endpoints."""

from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import UploadError
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.result import (
    CsvTemplate,
    ExamResultCreate,
    ExamResultResponse,
    ExamResultUpdate,
    ResultUploadResponse,
    StudentResultHistory,
)
from app.services.result import ResultService
from app.services.result_csv import BASIC_COLUMNS, COMPLETE_COLUMNS

router = APIRouter(
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)

TEMPLATE_SAMPLES = {
    CsvTemplate.BASIC: [
        "Asha Verma,100234,Class 5,C5A,Pass,A",
    ],
    CsvTemplate.COMPLETE: [
        "Asha Verma,100234,Class 5,C5A,Pass,A,Mathematics,88",
        "Asha Verma,100234,Class 5,C5A,Pass,A,English,79",
    ],
}


def _check_upload_size(content: bytes) -> None:
    if len(content) > settings.max_upload_bytes:
        raise UploadError(f"File size exceeds {settings.MAX_UPLOAD_SIZE_MB}MB limit")


def _is_csv_content_type(content_type: str | None) -> bool:
    return (content_type or "").split(";")[0].strip().lower() in settings.ALLOWED_CONTENT_TYPES


@router.get("", response_model=list[ExamResultResponse])
def list_results(
    db: Annotated[Session, Depends(get_db)],
):
    """
    List every result, newest first.
    """
    service = ResultService(db)
    return [service.to_response(r) for r in service.list_results()]


@router.get("/students", response_model=list[ExamResultResponse])
def list_students(
    db: Annotated[Session, Depends(get_db)],
):
    """
    One result per student and class code (the most recent), for the roster view.
    """
    service = ResultService(db)
    return [service.to_response(r) for r in service.list_unique_students()]


@router.get("/lookup", response_model=StudentResultHistory)
def lookup_results(
    db: Annotated[Session, Depends(get_db)],
    roll_no: str = Query(..., description="6-digit roll number"),
    class_code: str = Query(..., min_length=1),
):
    """
    Get every exam result of a student in a class section with an overall summary.
    """
    service = ResultService(db)
    return service.get_student_history(roll_no.strip(), class_code.strip())


@router.get("/template")
def download_result_template(
    kind: CsvTemplate = Query(CsvTemplate.BASIC, description="basic or complete"),
):
    """
    Download a CSV template for bulk upload.

    The basic template carries student rows only; the complete template has
    one row per subject with marks.
    """
    columns = COMPLETE_COLUMNS if kind == CsvTemplate.COMPLETE else BASIC_COLUMNS
    lines = [",".join(columns), *TEMPLATE_SAMPLES[kind]]
    output = BytesIO(("\n".join(lines) + "\n").encode("utf-8"))

    return StreamingResponse(
        output,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=result_template_{kind.value}.csv"},
    )


@router.get("/{result_id}", response_model=ExamResultResponse)
def get_result(
    result_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Get a result by ID.
    """
    service = ResultService(db)
    return service.to_response(service.get_result(result_id))


@router.post("", response_model=ExamResultResponse, status_code=status.HTTP_201_CREATED)
def create_result(
    request: ExamResultCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Add one exam result manually.

    Fails with 409 if the student already has this exam type in the class
    section, or already has the maximum number of exam results there.
    """
    service = ResultService(db)
    return service.create_result(request)


@router.api_route("/{result_id}", methods=["PUT", "PATCH"], response_model=ExamResultResponse)
def update_result(
    result_id: int,
    request: ExamResultUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Replace a result. Every field is required, PATCH included.
    """
    service = ResultService(db)
    return service.update_result(result_id, request)


@router.delete("/{result_id}", response_model=MessageResponse)
def delete_result(
    result_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Delete a result. This cannot be undone.
    """
    service = ResultService(db)
    service.delete_result(result_id)
    return MessageResponse(message="Result deleted successfully")


@router.post("/upload", response_model=ResultUploadResponse)
def upload_results(
    db: Annotated[Session, Depends(get_db)],
    file: UploadFile = File(...),
):
    """
    Upload results from a CSV file.

    - Basic template: student_name, roll_no, class, class_code, result_status, grade
    - Complete template: basic columns plus subject, marks (one row per subject),
      optionally max_marks
    - Nothing is saved if any row is invalid
    """
    if not file.filename:
        raise UploadError("No file provided")

    is_csv_name = file.filename.lower().endswith(tuple(settings.ALLOWED_EXTENSIONS))
    if not (is_csv_name or _is_csv_content_type(file.content_type)):
        raise UploadError("Please upload a valid CSV file")

    content = file.file.read()
    _check_upload_size(content)

    service = ResultService(db)
    return service.import_csv(content, file.filename)


@router.post("/upload/raw", response_model=ResultUploadResponse)
async def upload_results_raw(
    http_request: Request,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Upload results from a CSV sent as the raw request body (text/csv).
    """
    if not _is_csv_content_type(http_request.headers.get("content-type")):
        raise UploadError("Please upload a valid CSV file")

    content = await http_request.body()
    _check_upload_size(content)

    service = ResultService(db)
    return await run_in_threadpool(service.import_csv, content)
