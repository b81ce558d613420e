from unittest import TestCase

from bson import ObjectId
from pydantic import ValidationError

from taskpilot.models.user import UserModel


class UserModelTest(TestCase):
    def setUp(self) -> None:
        self.valid_user_data = {
            "_id": ObjectId(),
            "name": "Ada",
            "email": "ada@example.com",
            "password": "hashed",
            "teamId": str(ObjectId()),
        }

    def test_defaults_to_unprotected_team_member(self):
        user = UserModel(**self.valid_user_data)

        self.assertEqual(user.role, "Team Member")
        self.assertFalse(user.isProtectedAccount)
        self.assertIsInstance(user.teamId, ObjectId)

    def test_user_model_throws_error_when_missing_required_fields(self):
        for field in ["name", "email", "password"]:
            with self.subTest(f"missing field: {field}"):
                incomplete_data = self.valid_user_data.copy()
                incomplete_data.pop(field)

                with self.assertRaises(ValidationError) as context:
                    UserModel(**incomplete_data)

                error_fields = [e["loc"][0] for e in context.exception.errors()]
                self.assertIn(field, error_fields)

    def test_user_model_throws_error_when_invalid_email(self):
        invalid_data = self.valid_user_data.copy()
        invalid_data["email"] = "invalid-email"

        with self.assertRaises(ValidationError) as context:
            UserModel(**invalid_data)

        self.assertIn("email", [e["loc"][0] for e in context.exception.errors()])

    def test_rejects_unknown_role(self):
        with self.assertRaises(ValidationError):
            UserModel(**self.valid_user_data, role="Owner")

    def test_to_document_keeps_object_ids(self):
        document = UserModel(**self.valid_user_data).to_document()

        self.assertEqual(document["_id"], self.valid_user_data["_id"])
        self.assertIsInstance(document["teamId"], ObjectId)
        self.assertNotIn("bio", document)
