"""Contact message, admission inquiry and newsletter schemas.

Field names are camelCase on the wire to match the public site's forms.
"""

from datetime import datetime

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.inquiry import AdmissionStatus, ContactStatus, SubscriberStatus
from app.schemas.common import BaseSchema

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class InquirySchema(BaseSchema):
    model_config = ConfigDict(alias_generator=to_camel)


class ContactMessageCreate(InquirySchema):
    """Public contact form submission."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    phone: str = Field(..., min_length=1, max_length=50)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)


class ContactMessageResponse(ContactMessageCreate):
    id: int
    status: ContactStatus
    created_at: datetime


class AdmissionInquiryCreate(InquirySchema):
    """Public admission inquiry submission."""

    student_name: str = Field(..., min_length=1, max_length=255)
    parent_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    phone: str = Field(..., min_length=1, max_length=50)
    class_interested: str = Field(..., min_length=1, max_length=50)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)


class AdmissionInquiryResponse(AdmissionInquiryCreate):
    id: int
    status: AdmissionStatus
    created_at: datetime


class NewsletterSubscriberCreate(InquirySchema):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)


class NewsletterSubscriberResponse(NewsletterSubscriberCreate):
    id: int
    status: SubscriberStatus
    created_at: datetime


class AdminOverview(InquirySchema):
    """Everything the admin dashboard loads on open."""

    admissions: list[AdmissionInquiryResponse]
    contacts: list[ContactMessageResponse]
    newsletters: list[NewsletterSubscriberResponse]
    total_results: int
    total_students: int
    timestamp: datetime
