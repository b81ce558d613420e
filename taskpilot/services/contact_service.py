import logging
from typing import List

from taskpilot.constants.role import Role
from taskpilot.dto.contact_dto import ContactDTO
from taskpilot.exceptions.not_found_exceptions import ContactNotFoundError
from taskpilot.models.contact import ContactModel
from taskpilot.repositories.contact_repository import ContactRepository
from taskpilot.repositories.user_repository import UserRepository
from taskpilot.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class ContactService:
    @classmethod
    def submit(cls, name: str, email: str, subject: str, message: str) -> ContactDTO:
        """Store a public submission and tell every Admin about it."""
        contact = ContactRepository.create(ContactModel(name=name, email=email, subject=subject, message=message))
        logger.info(f"Contact submission {contact.id} received")

        for admin in UserRepository.list_by_role([Role.ADMIN.value]):
            NotificationService.notify_contact_form_submitted(contact, admin)

        return ContactDTO.from_model(contact)

    @classmethod
    def list_contacts(cls) -> List[ContactDTO]:
        return [ContactDTO.from_model(contact) for contact in ContactRepository.list_all()]

    @classmethod
    def get_contact(cls, contact_id: str) -> ContactDTO:
        contact = ContactRepository.get_by_id(contact_id)
        if not contact:
            raise ContactNotFoundError()
        return ContactDTO.from_model(contact)

    @classmethod
    def update_status(cls, contact_id: str, status: str) -> ContactDTO:
        contact = ContactRepository.update_status(contact_id, status)
        if not contact:
            raise ContactNotFoundError()
        return ContactDTO.from_model(contact)

    @classmethod
    def delete_contact(cls, contact_id: str) -> None:
        if not ContactRepository.delete(contact_id):
            raise ContactNotFoundError()
