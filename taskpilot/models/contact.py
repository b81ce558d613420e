from pydantic import Field, EmailStr
from typing import ClassVar
from datetime import datetime

from taskpilot.constants.contact import ContactStatus
from taskpilot.models.common.document import Document, utc_now


class ContactModel(Document):
    """
    Public contact form submission.
    """

    collection_name: ClassVar[str] = "contacts"

    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    status: ContactStatus = ContactStatus.UNREAD
    createdAt: datetime = Field(default_factory=utc_now)
