from unittest import TestCase
from unittest.mock import MagicMock, patch

from bson import ObjectId

from taskpilot.models.project import ProjectModel
from taskpilot.repositories.message_repository import MessageRepository
from taskpilot.repositories.project_repository import ProjectRepository


class ProjectRepositoryTests(TestCase):
    def setUp(self) -> None:
        self.mock_collection = MagicMock()
        self.mock_db_manager = MagicMock()
        self.mock_db_manager.get_collection.return_value = self.mock_collection

    @patch("taskpilot.repositories.project_repository.TaskRepository.delete_by_project", return_value=4)
    @patch("taskpilot.repositories.common.mongo_repository.DatabaseManager")
    def test_delete_removes_tasks_before_project(self, mock_db_manager, mock_delete_by_project):
        mock_db_manager.return_value = self.mock_db_manager
        self.mock_collection.delete_one.return_value = MagicMock(deleted_count=1)
        project_id = ObjectId()

        self.assertTrue(ProjectRepository.delete(str(project_id)))

        mock_delete_by_project.assert_called_once_with(project_id)
        self.mock_collection.delete_one.assert_called_once_with({"_id": project_id})

    @patch("taskpilot.repositories.common.mongo_repository.DatabaseManager")
    def test_get_by_id_maps_document(self, mock_db_manager):
        mock_db_manager.return_value = self.mock_db_manager
        project_id = ObjectId()
        self.mock_collection.find_one.return_value = {"_id": project_id, "name": "Apollo", "status": "Pending"}

        project = ProjectRepository.get_by_id(str(project_id))

        self.assertIsInstance(project, ProjectModel)
        self.assertEqual(project.id, project_id)
        self.assertEqual(project.teamMembers, [])

    @patch("taskpilot.repositories.common.mongo_repository.DatabaseManager")
    def test_update_stamps_updated_at(self, mock_db_manager):
        mock_db_manager.return_value = self.mock_db_manager
        self.mock_collection.find_one_and_update.return_value = None

        self.assertIsNone(ProjectRepository.update(str(ObjectId()), {"name": "Renamed"}))

        update = self.mock_collection.find_one_and_update.call_args[0][1]["$set"]
        self.assertEqual(update["name"], "Renamed")
        self.assertIn("updatedAt", update)


class MessageReadReceiptQueryTests(TestCase):
    @patch("taskpilot.repositories.common.mongo_repository.DatabaseManager")
    def test_mark_chat_read_only_targets_unread_messages(self, mock_db_manager):
        mock_collection = MagicMock()
        mock_collection.update_many.return_value = MagicMock(modified_count=2)
        mock_db_manager.return_value.get_collection.return_value = mock_collection
        user_id = ObjectId()

        self.assertEqual(MessageRepository.mark_chat_read("chat_1_abc", str(user_id)), 2)

        query, update = mock_collection.update_many.call_args[0]
        self.assertEqual(query["chatId"], "chat_1_abc")
        self.assertEqual(query["readBy.user"], {"$ne": user_id})
        self.assertEqual(update["$push"]["readBy"]["user"], user_id)
