"""Admission inquiry endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import MessageResponse
from app.schemas.inquiry import AdmissionInquiryCreate, AdmissionInquiryResponse
from app.services.inquiry import AdmissionService

router = APIRouter()


@router.post("", response_model=AdmissionInquiryResponse, status_code=status.HTTP_201_CREATED)
def create_admission(
    request: AdmissionInquiryCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Save an admission inquiry. New inquiries start as pending.
    """
    return AdmissionService(db).insert(request)


@router.get("", response_model=list[AdmissionInquiryResponse])
def list_admissions(
    db: Annotated[Session, Depends(get_db)],
):
    """
    List admission inquiries, newest first.
    """
    return AdmissionService(db).list_all()


@router.delete("/{admission_id}", response_model=MessageResponse)
def delete_admission(
    admission_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    AdmissionService(db).delete_by_id(admission_id)
    return MessageResponse(message="Admission deleted")
