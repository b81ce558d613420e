from unittest import TestCase
from unittest.mock import call, patch

from bson import ObjectId

from taskpilot.constants.role import Role
from taskpilot.exceptions.not_found_exceptions import ContactNotFoundError
from taskpilot.services.contact_service import ContactService
from taskpilot.tests.fixtures.user import build_user


class ContactServiceTests(TestCase):
    @patch("taskpilot.services.contact_service.NotificationService.notify_contact_form_submitted")
    @patch("taskpilot.services.contact_service.UserRepository.list_by_role")
    @patch("taskpilot.services.contact_service.ContactRepository.create")
    def test_submit_notifies_every_admin(self, mock_create, mock_list_by_role, mock_notify):
        mock_create.side_effect = lambda contact: contact.model_copy(update={"id": ObjectId()})
        admins = [build_user(Role.ADMIN), build_user(Role.ADMIN)]
        mock_list_by_role.return_value = admins

        contact = ContactService.submit("Jane", "jane@example.com", "Pricing", "How much?")

        self.assertEqual(contact.status, "unread")
        mock_list_by_role.assert_called_once_with([Role.ADMIN.value])
        self.assertEqual(mock_notify.call_count, 2)
        notified = [c.args[1] for c in mock_notify.call_args_list]
        self.assertEqual(notified, admins)

    @patch("taskpilot.services.contact_service.NotificationService.notify_contact_form_submitted")
    @patch("taskpilot.services.contact_service.UserRepository.list_by_role", return_value=[])
    @patch("taskpilot.services.contact_service.ContactRepository.create")
    def test_submit_without_admins_still_stores(self, mock_create, mock_list_by_role, mock_notify):
        mock_create.side_effect = lambda contact: contact.model_copy(update={"id": ObjectId()})

        ContactService.submit("Jane", "jane@example.com", "Pricing", "How much?")

        mock_create.assert_called_once()
        mock_notify.assert_not_called()

    @patch("taskpilot.services.contact_service.ContactRepository.delete", return_value=False)
    def test_delete_unknown_contact(self, mock_delete):
        with self.assertRaises(ContactNotFoundError):
            ContactService.delete_contact(str(ObjectId()))

    @patch("taskpilot.services.contact_service.ContactRepository.update_status", return_value=None)
    def test_update_status_unknown_contact(self, mock_update_status):
        contact_id = str(ObjectId())

        with self.assertRaises(ContactNotFoundError):
            ContactService.update_status(contact_id, "read")
        self.assertEqual(mock_update_status.call_args, call(contact_id, "read"))
