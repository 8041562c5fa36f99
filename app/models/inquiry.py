"""Contact message, admission inquiry and newsletter subscriber models."""

import enum

from sqlalchemy import Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.models.base import CreatedAtMixin, IDMixin


class ContactStatus(str, enum.Enum):
    UNREAD = "unread"
    READ = "read"


class AdmissionStatus(str, enum.Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    CONTACTED = "contacted"
    ADMITTED = "admitted"


class SubscriberStatus(str, enum.Enum):
    ACTIVE = "Active"
    UNSUBSCRIBED = "Unsubscribed"


class ContactMessage(Base, IDMixin, CreatedAtMixin):
    """Message submitted through the public contact form."""

    __tablename__ = "contact_messages"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ContactStatus] = mapped_column(
        Enum(ContactStatus, name="contact_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ContactStatus.UNREAD,
    )

    def __repr__(self) -> str:
        return f"<ContactMessage(id={self.id}, email={self.email})>"


class AdmissionInquiry(Base, IDMixin, CreatedAtMixin):
    """Admission inquiry submitted by a parent or guardian."""

    __tablename__ = "admission_inquiries"

    student_name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    class_interested: Mapped[str] = mapped_column(String(50), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[AdmissionStatus] = mapped_column(
        Enum(AdmissionStatus, name="admission_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AdmissionStatus.PENDING,
    )

    def __repr__(self) -> str:
        return f"<AdmissionInquiry(id={self.id}, student={self.student_name})>"


class NewsletterSubscriber(Base, IDMixin, CreatedAtMixin):
    """Email address signed up through the newsletter box."""

    __tablename__ = "newsletter_subscribers"

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[SubscriberStatus] = mapped_column(
        Enum(SubscriberStatus, name="subscriber_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SubscriberStatus.ACTIVE,
    )

    def __repr__(self) -> str:
        return f"<NewsletterSubscriber(id={self.id}, email={self.email})>"
