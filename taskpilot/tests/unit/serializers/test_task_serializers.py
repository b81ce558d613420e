from datetime import datetime, timedelta, timezone
from unittest import TestCase

from bson import ObjectId

from taskpilot.serializers.create_task_serializer import CreateTaskSerializer
from taskpilot.serializers.update_task_serializer import UpdateTaskSerializer


class CreateTaskSerializerTest(TestCase):
    def setUp(self):
        self.valid_data = {
            "title": " Write copy ",
            "project": str(ObjectId()),
            "dueDate": (datetime.now(timezone.utc) + timedelta(days=2)).isoformat().replace("+00:00", "Z"),
        }

    def test_applies_defaults(self):
        serializer = CreateTaskSerializer(data=self.valid_data)

        self.assertTrue(serializer.is_valid())
        self.assertEqual(serializer.validated_data["title"], "Write copy")
        self.assertEqual(serializer.validated_data["status"], "To Do")
        self.assertEqual(serializer.validated_data["priority"], "Medium")
        self.assertEqual(serializer.validated_data["assignedTo"], [])

    def test_serializer_fails_without_title_or_project(self):
        for field in ["title", "project"]:
            with self.subTest(field=field):
                data = self.valid_data.copy()
                del data[field]
                serializer = CreateTaskSerializer(data=data)

                self.assertFalse(serializer.is_valid())
                self.assertIn(field, serializer.errors)

    def test_whitespace_title_is_rejected(self):
        serializer = CreateTaskSerializer(data={**self.valid_data, "title": "   "})

        self.assertFalse(serializer.is_valid())
        self.assertIn("title", serializer.errors)


class UpdateTaskSerializerTest(TestCase):
    def test_only_sent_fields_are_validated(self):
        serializer = UpdateTaskSerializer(data={"status": "In Progress"})

        self.assertTrue(serializer.is_valid())
        self.assertEqual(dict(serializer.validated_data), {"status": "In Progress"})

    def test_serializer_rejects_invalid_priority(self):
        serializer = UpdateTaskSerializer(data={"priority": "urgent"})

        self.assertFalse(serializer.is_valid())
        self.assertIn("priority", serializer.errors)
