"""Contact message, admission inquiry and newsletter subscriber storage."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.inquiry import (
    AdmissionInquiry,
    AdmissionStatus,
    ContactMessage,
    ContactStatus,
    NewsletterSubscriber,
    SubscriberStatus,
)
from app.schemas.inquiry import (
    AdmissionInquiryCreate,
    AdmissionInquiryResponse,
    ContactMessageCreate,
    ContactMessageResponse,
    NewsletterSubscriberCreate,
    NewsletterSubscriberResponse,
)

logger = logging.getLogger(__name__)


class ContactService:
    """Contact form message store."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, request: ContactMessageCreate) -> ContactMessageResponse:
        contact = ContactMessage(**request.model_dump(), status=ContactStatus.UNREAD)
        self.db.add(contact)
        self.db.flush()
        self.db.refresh(contact)
        logger.info(f"Contact message saved: id={contact.id}")
        return ContactMessageResponse.model_validate(contact)

    def list_all(self) -> list[ContactMessageResponse]:
        """All contact messages, newest first."""
        result = self.db.execute(
            select(ContactMessage).order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
        )
        return [ContactMessageResponse.model_validate(c) for c in result.scalars().all()]

    def delete_by_id(self, contact_id: int) -> None:
        contact = self.db.get(ContactMessage, contact_id)
        if not contact:
            raise NotFoundError("Contact", str(contact_id))
        self.db.delete(contact)
        self.db.flush()
        logger.info(f"Contact message deleted: id={contact_id}")


class AdmissionService:
    """Admission inquiry store."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, request: AdmissionInquiryCreate) -> AdmissionInquiryResponse:
        admission = AdmissionInquiry(**request.model_dump(), status=AdmissionStatus.PENDING)
        self.db.add(admission)
        self.db.flush()
        self.db.refresh(admission)
        logger.info(f"Admission inquiry saved: id={admission.id}")
        return AdmissionInquiryResponse.model_validate(admission)

    def list_all(self) -> list[AdmissionInquiryResponse]:
        """All admission inquiries, newest first."""
        result = self.db.execute(
            select(AdmissionInquiry).order_by(AdmissionInquiry.created_at.desc(), AdmissionInquiry.id.desc())
        )
        return [AdmissionInquiryResponse.model_validate(a) for a in result.scalars().all()]

    def delete_by_id(self, admission_id: int) -> None:
        admission = self.db.get(AdmissionInquiry, admission_id)
        if not admission:
            raise NotFoundError("Admission", str(admission_id))
        self.db.delete(admission)
        self.db.flush()
        logger.info(f"Admission inquiry deleted: id={admission_id}")


class NewsletterService:
    """Newsletter subscriber store."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, request: NewsletterSubscriberCreate) -> NewsletterSubscriberResponse:
        subscriber = NewsletterSubscriber(email=request.email, status=SubscriberStatus.ACTIVE)
        self.db.add(subscriber)
        self.db.flush()
        self.db.refresh(subscriber)
        logger.info(f"Newsletter subscriber saved: id={subscriber.id}")
        return NewsletterSubscriberResponse.model_validate(subscriber)

    def list_all(self) -> list[NewsletterSubscriberResponse]:
        result = self.db.execute(
            select(NewsletterSubscriber).order_by(NewsletterSubscriber.created_at.desc(), NewsletterSubscriber.id.desc())
        )
        return [NewsletterSubscriberResponse.model_validate(s) for s in result.scalars().all()]

    def delete_by_id(self, subscriber_id: int) -> None:
        subscriber = self.db.get(NewsletterSubscriber, subscriber_id)
        if not subscriber:
            raise NotFoundError("Subscriber", str(subscriber_id))
        self.db.delete(subscriber)
        self.db.flush()
        logger.info(f"Newsletter subscriber deleted: id={subscriber_id}")
