"""Contact form endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import MessageResponse
from app.schemas.inquiry import ContactMessageCreate, ContactMessageResponse
from app.services.inquiry import ContactService

router = APIRouter()


@router.post("", response_model=ContactMessageResponse, status_code=status.HTTP_201_CREATED)
def create_contact(
    request: ContactMessageCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Save a message from the public contact form.
    """
    return ContactService(db).insert(request)


@router.get("", response_model=list[ContactMessageResponse])
def list_contacts(
    db: Annotated[Session, Depends(get_db)],
):
    """
    List contact messages, newest first.
    """
    return ContactService(db).list_all()


@router.delete("/{contact_id}", response_model=MessageResponse)
def delete_contact(
    contact_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    ContactService(db).delete_by_id(contact_id)
    return MessageResponse(message="Contact deleted")
