from unittest import TestCase

from bson import ObjectId
from pydantic import ValidationError

from taskpilot.models.chat import ChatModel
from taskpilot.models.task import TaskModel


class TaskModelTest(TestCase):
    def test_defaults(self):
        task = TaskModel(title="Write copy", project=str(ObjectId()))

        self.assertEqual(task.status, "To Do")
        self.assertEqual(task.priority, "Medium")
        self.assertEqual(task.assignedTo, [])
        self.assertIsNotNone(task.createdAt)

    def test_rejects_invalid_project_id(self):
        with self.assertRaises(ValidationError) as context:
            TaskModel(title="Write copy", project="not-an-id")

        self.assertEqual(context.exception.errors()[0]["loc"], ("project",))

    def test_is_assigned_to_compares_string_ids(self):
        assignee = ObjectId()
        task = TaskModel(title="Write copy", project=ObjectId(), assignedTo=[assignee])

        self.assertTrue(task.is_assigned_to(str(assignee)))
        self.assertFalse(task.is_assigned_to(str(ObjectId())))

    def test_json_dump_renders_ids_as_strings(self):
        assignee = ObjectId()
        task = TaskModel(title="Write copy", project=ObjectId(), assignedTo=[assignee])

        self.assertEqual(task.model_dump(mode="json")["assignedTo"], [str(assignee)])


class ChatModelTest(TestCase):
    def test_has_participant(self):
        first, second = ObjectId(), ObjectId()
        chat = ChatModel(chatId="chat_1_abcdefghi", participants=[first, second])

        self.assertEqual(chat.chatType, "direct")
        self.assertTrue(chat.isActive)
        self.assertTrue(chat.has_participant(str(second)))
        self.assertFalse(chat.has_participant(ObjectId()))
