from unittest import TestCase
from unittest.mock import patch

from bson import ObjectId

from taskpilot.constants.role import Role
from taskpilot.constants.task import TaskStatus
from taskpilot.dto.task_dto import CreateTaskDTO
from taskpilot.exceptions.not_found_exceptions import CommentNotFoundError
from taskpilot.exceptions.permission_exceptions import PermissionDeniedError
from taskpilot.models.common.embedded import CommentModel
from taskpilot.services.task_service import TaskService
from taskpilot.tests.fixtures.project import build_project, build_task
from taskpilot.tests.fixtures.user import build_user


@patch("taskpilot.services.task_service.TaskService._to_dto", side_effect=lambda task, project=None: task)
@patch("taskpilot.services.task_service.NotificationService")
@patch("taskpilot.services.task_service.UserService.get_user")
@patch("taskpilot.services.task_service.TaskRepository.update")
@patch("taskpilot.services.task_service.PermissionService.require_task_access")
class UpdateTaskTests(TestCase):
    def setUp(self):
        self.manager = build_user(Role.MANAGER)
        self.member = build_user(Role.TEAM_MEMBER)
        self.project = build_project(manager_id=self.manager.id, team_members=[self.member.id])
        self.task = build_task(self.project.id, assigned_to=[self.member.id])

    def test_team_member_can_update_status_only(
        self, mock_access, mock_update, mock_get_user, mock_notifications, mock_to_dto
    ):
        mock_access.return_value = (self.task, self.project)
        mock_update.return_value = self.task.model_copy(update={"status": TaskStatus.IN_PROGRESS.value})
        mock_get_user.return_value = self.member

        TaskService.update_task(
            str(self.task.id),
            {"status": "In Progress"},
            str(self.member.id),
            Role.TEAM_MEMBER.value,
            requested_fields={"status"},
        )

        mock_update.assert_called_once_with(self.task.id, {"status": "In Progress"})
        mock_notifications.notify_task_updated.assert_called_once()

    def test_team_member_sending_other_fields_is_rejected(
        self, mock_access, mock_update, mock_get_user, mock_notifications, mock_to_dto
    ):
        mock_access.return_value = (self.task, self.project)

        with self.assertRaises(PermissionDeniedError):
            TaskService.update_task(
                str(self.task.id),
                {"status": "Completed", "title": "Renamed"},
                str(self.member.id),
                Role.TEAM_MEMBER.value,
                requested_fields={"status", "title"},
            )

        mock_update.assert_not_called()
        mock_notifications.notify_task_updated.assert_not_called()

    def test_team_member_with_empty_body_is_rejected(
        self, mock_access, mock_update, mock_get_user, mock_notifications, mock_to_dto
    ):
        mock_access.return_value = (self.task, self.project)

        with self.assertRaises(PermissionDeniedError):
            TaskService.update_task(
                str(self.task.id), {}, str(self.member.id), Role.TEAM_MEMBER.value, requested_fields=set()
            )
        mock_update.assert_not_called()

    def test_manager_unknown_fields_are_ignored(
        self, mock_access, mock_update, mock_get_user, mock_notifications, mock_to_dto
    ):
        mock_access.return_value = (self.task, self.project)
        mock_update.return_value = self.task
        mock_get_user.return_value = self.manager

        TaskService.update_task(
            str(self.task.id),
            {"title": "Renamed", "project": str(ObjectId()), "comments": []},
            str(self.manager.id),
            Role.MANAGER.value,
        )

        mock_update.assert_called_once_with(self.task.id, {"title": "Renamed"})

    def test_completing_a_task_fires_task_completed(
        self, mock_access, mock_update, mock_get_user, mock_notifications, mock_to_dto
    ):
        completed = self.task.model_copy(update={"status": TaskStatus.COMPLETED.value})
        mock_access.return_value = (self.task, self.project)
        mock_update.return_value = completed
        mock_get_user.return_value = self.member

        TaskService.update_task(
            str(self.task.id),
            {"status": "Completed"},
            str(self.member.id),
            Role.TEAM_MEMBER.value,
            requested_fields={"status"},
        )

        mock_notifications.notify_task_completed.assert_called_once_with(completed, self.project, self.member)

    def test_already_completed_task_does_not_fire_again(
        self, mock_access, mock_update, mock_get_user, mock_notifications, mock_to_dto
    ):
        completed = self.task.model_copy(update={"status": TaskStatus.COMPLETED.value})
        mock_access.return_value = (completed, self.project)
        mock_update.return_value = completed
        mock_get_user.return_value = self.manager

        TaskService.update_task(str(self.task.id), {"status": "Completed"}, str(self.manager.id), Role.MANAGER.value)

        mock_notifications.notify_task_completed.assert_not_called()

    @patch("taskpilot.services.task_service.TaskRepository.to_object_ids", side_effect=lambda ids: ids)
    def test_assignee_changes_notify_added_and_removed(
        self, mock_to_object_ids, mock_access, mock_update, mock_get_user, mock_notifications, mock_to_dto
    ):
        newcomer = ObjectId()
        mock_access.return_value = (self.task, self.project)
        mock_update.return_value = self.task.model_copy(update={"assignedTo": [newcomer]})
        mock_get_user.return_value = self.manager

        TaskService.update_task(
            str(self.task.id), {"assignedTo": [str(newcomer)]}, str(self.manager.id), Role.MANAGER.value
        )

        mock_notifications.notify_member_added.assert_called_once()
        self.assertEqual(mock_notifications.notify_member_added.call_args[0][0], newcomer)
        mock_notifications.notify_member_removed.assert_called_once()
        self.assertEqual(mock_notifications.notify_member_removed.call_args[0][0], self.member.id)


class CreateTaskTests(TestCase):
    @patch("taskpilot.services.task_service.TaskService._to_dto", side_effect=lambda task, project=None: task)
    @patch("taskpilot.services.task_service.NotificationService")
    @patch("taskpilot.services.task_service.TaskRepository.create", side_effect=lambda task: task)
    @patch("taskpilot.services.task_service.UserService.get_user")
    @patch("taskpilot.services.task_service.PermissionService.require_project_access")
    def test_create_task_notifies_each_assignee(
        self, mock_access, mock_get_user, mock_create, mock_notifications, mock_to_dto
    ):
        manager = build_user(Role.MANAGER)
        project = build_project(manager_id=manager.id)
        assignees = [str(ObjectId()), str(ObjectId())]
        mock_access.return_value = project
        mock_get_user.return_value = manager

        task = TaskService.create_task(
            CreateTaskDTO(title="Ship it", project=str(project.id), assignedTo=assignees),
            str(manager.id),
            Role.MANAGER.value,
        )

        self.assertEqual(task.status, "To Do")
        mock_access.assert_called_once_with(str(manager.id), Role.MANAGER.value, str(project.id))
        mock_notifications.notify_task_created.assert_called_once()
        self.assertEqual(mock_notifications.notify_member_added.call_count, 2)


class DeleteTaskCommentTests(TestCase):
    @patch("taskpilot.services.task_service.PermissionService.require_task_access")
    def test_unknown_comment(self, mock_access):
        project = build_project()
        task = build_task(project.id, comments=[CommentModel(text="hi", author=ObjectId())])
        mock_access.return_value = (task, project)

        with self.assertRaises(CommentNotFoundError):
            TaskService.delete_comment(str(task.id), str(ObjectId()), str(ObjectId()), Role.MANAGER.value)


class TaskQueryTests(TestCase):
    @patch("taskpilot.services.task_service.TaskService._to_dtos", side_effect=lambda tasks, projects=None: tasks)
    @patch("taskpilot.services.task_service.TaskRepository.list_tasks")
    def test_calendar_is_scoped_to_team_member(self, mock_list_tasks, mock_to_dtos):
        mock_list_tasks.return_value = []

        TaskService.get_tasks_by_due_date("user-1", Role.TEAM_MEMBER.value)
        mock_list_tasks.assert_called_with(assignee_id="user-1", sort_field="dueDate")

        TaskService.get_tasks_by_due_date("user-2", Role.MANAGER.value)
        mock_list_tasks.assert_called_with(assignee_id=None, sort_field="dueDate")

    @patch("taskpilot.services.task_service.ProjectRepository.list_managed_by")
    def test_manager_without_projects_has_no_tasks(self, mock_list_managed_by):
        mock_list_managed_by.return_value = []

        self.assertEqual(TaskService.get_manager_tasks(str(ObjectId())), [])
