"""Newsletter subscription endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import MessageResponse
from app.schemas.inquiry import NewsletterSubscriberCreate, NewsletterSubscriberResponse
from app.services.inquiry import NewsletterService

router = APIRouter()


@router.post("", response_model=NewsletterSubscriberResponse, status_code=status.HTTP_201_CREATED)
def subscribe(
    request: NewsletterSubscriberCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Sign an email address up for the newsletter.
    """
    return NewsletterService(db).insert(request)


@router.get("", response_model=list[NewsletterSubscriberResponse])
def list_subscribers(
    db: Annotated[Session, Depends(get_db)],
):
    return NewsletterService(db).list_all()


@router.delete("/{subscriber_id}", response_model=MessageResponse)
def delete_subscriber(
    subscriber_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    NewsletterService(db).delete_by_id(subscriber_id)
    return MessageResponse(message="Subscriber deleted")
