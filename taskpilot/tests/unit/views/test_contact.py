from datetime import datetime, timezone
from unittest.mock import Mock, patch

from bson import ObjectId
from rest_framework import status
from rest_framework.reverse import reverse
from rest_framework.test import APIClient, APISimpleTestCase

from taskpilot.constants.messages import AppMessages
from taskpilot.constants.role import Role
from taskpilot.dto.contact_dto import ContactDTO
from taskpilot.tests.fixtures.user import bearer_for, build_user


def build_contact_dto(**overrides) -> ContactDTO:
    data = {
        "id": str(ObjectId()),
        "name": "Grace",
        "email": "grace@example.com",
        "subject": "Pricing",
        "message": "Do you offer discounts?",
        "status": "unread",
        "createdAt": datetime.now(timezone.utc),
    }
    data.update(overrides)
    return ContactDTO(**data)


class ContactViewTests(APISimpleTestCase):
    def setUp(self):
        self.client = APIClient()
        self.payload = {
            "name": "Grace",
            "email": "grace@example.com",
            "subject": "Pricing",
            "message": "Do you offer discounts?",
        }

    @patch("taskpilot.views.contact.ContactService.submit")
    def test_submission_needs_no_token(self, mock_submit: Mock):
        mock_submit.return_value = build_contact_dto()

        response = self.client.post(reverse("contact"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["message"], AppMessages.CONTACT_SUBMITTED)
        mock_submit.assert_called_once_with(**self.payload)

    @patch("taskpilot.views.contact.ContactService.submit")
    def test_missing_subject_is_rejected(self, mock_submit: Mock):
        del self.payload["subject"]

        response = self.client.post(reverse("contact"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["errors"][0]["source"], {"parameter": "subject"})
        mock_submit.assert_not_called()


class ContactAdminViewTests(APISimpleTestCase):
    def setUp(self):
        self.client = APIClient()

    def test_admin_list_requires_token(self):
        response = self.client.get(reverse("contact_admin"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @patch("taskpilot.views.contact.ContactService.list_contacts")
    def test_manager_may_not_list_contacts(self, mock_list_contacts: Mock):
        self.client.credentials(HTTP_AUTHORIZATION=bearer_for(build_user(Role.MANAGER)))

        response = self.client.get(reverse("contact_admin"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        mock_list_contacts.assert_not_called()

    @patch("taskpilot.views.contact.ContactService.list_contacts")
    def test_admin_lists_contacts(self, mock_list_contacts: Mock):
        contact = build_contact_dto()
        mock_list_contacts.return_value = [contact]
        self.client.credentials(HTTP_AUTHORIZATION=bearer_for(build_user(Role.ADMIN)))

        response = self.client.get(reverse("contact_admin"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["id"], contact.id)

    @patch("taskpilot.views.contact.ContactService.update_status")
    def test_unknown_status_is_rejected(self, mock_update_status: Mock):
        self.client.credentials(HTTP_AUTHORIZATION=bearer_for(build_user(Role.ADMIN)))

        response = self.client.patch(
            reverse("contact_admin_status", args=[str(ObjectId())]), {"status": "archived"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        mock_update_status.assert_not_called()

    @patch("taskpilot.views.contact.ContactService.update_status")
    def test_admin_updates_status(self, mock_update_status: Mock):
        contact_id = str(ObjectId())
        mock_update_status.return_value = build_contact_dto(id=contact_id, status="replied")
        self.client.credentials(HTTP_AUTHORIZATION=bearer_for(build_user(Role.ADMIN)))

        response = self.client.patch(
            reverse("contact_admin_status", args=[contact_id]), {"status": "replied"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["contact"]["status"], "replied")
        mock_update_status.assert_called_once_with(contact_id, "replied")
