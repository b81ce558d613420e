from pydantic import BaseModel
from datetime import datetime

from taskpilot.models.contact import ContactModel


class ContactDTO(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    status: str
    createdAt: datetime

    @classmethod
    def from_model(cls, contact: ContactModel) -> "ContactDTO":
        return cls(
            id=str(contact.id),
            name=contact.name,
            email=contact.email,
            subject=contact.subject,
            message=contact.message,
            status=contact.status,
            createdAt=contact.createdAt,
        )
