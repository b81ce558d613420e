from unittest import TestCase

from taskpilot.serializers.create_chat_serializer import CreateChatSerializer
from taskpilot.serializers.create_project_serializer import CreateProjectSerializer


class CreateProjectSerializerTest(TestCase):
    def test_status_defaults_to_pending(self):
        serializer = CreateProjectSerializer(data={"name": " Launch "})

        self.assertTrue(serializer.is_valid())
        self.assertEqual(serializer.validated_data["name"], "Launch")
        self.assertEqual(serializer.validated_data["status"], "Pending")
        self.assertEqual(serializer.validated_data["teamMembers"], [])

    def test_rejects_unknown_status(self):
        serializer = CreateProjectSerializer(data={"name": "Launch", "status": "Archived"})

        self.assertFalse(serializer.is_valid())
        self.assertIn("status", serializer.errors)


class CreateChatSerializerTest(TestCase):
    def test_team_chats_are_not_created_through_the_direct_endpoint(self):
        serializer = CreateChatSerializer(data={"participantId": "abc", "chatType": "team"})

        self.assertFalse(serializer.is_valid())
        self.assertIn("chatType", serializer.errors)
