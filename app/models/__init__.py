"""Database models package."""

from app.models.inquiry import (
    AdmissionInquiry,
    AdmissionStatus,
    ContactMessage,
    ContactStatus,
    NewsletterSubscriber,
    SubscriberStatus,
)
from app.models.result import ExamResult, ExamType, ResultStatus

__all__ = [
    # Results
    "ExamResult",
    "ExamType",
    "ResultStatus",
    # Inquiries
    "ContactMessage",
    "ContactStatus",
    "AdmissionInquiry",
    "AdmissionStatus",
    "NewsletterSubscriber",
    "SubscriberStatus",
]
