from unittest import TestCase
from unittest.mock import patch

from bson import ObjectId

from taskpilot.constants.notification import NotificationPriority, NotificationType
from taskpilot.constants.role import Role
from taskpilot.models.chat import ChatModel
from taskpilot.models.message import MessageModel
from taskpilot.services.notification_service import NotificationService, unique_recipients
from taskpilot.tests.fixtures.project import build_project, build_task
from taskpilot.tests.fixtures.user import build_user


def recipients_of(mock_create_many):
    notifications = mock_create_many.call_args[0][0]
    return [str(notification.recipient) for notification in notifications]


class UniqueRecipientsTests(TestCase):
    def test_drops_duplicates_none_and_excluded(self):
        a, b, c = ObjectId(), ObjectId(), ObjectId()
        result = unique_recipients([a, None, b, a, c, str(b)], exclude=[c])
        self.assertEqual(result, [a, b])

    def test_keeps_order(self):
        ids = [ObjectId() for _ in range(4)]
        self.assertEqual(unique_recipients(list(reversed(ids))), list(reversed(ids)))


@patch("taskpilot.services.notification_service.NotificationRepository.create_many", side_effect=lambda n: n)
class TaskNotificationTests(TestCase):
    def setUp(self):
        self.manager = build_user(Role.MANAGER)
        self.member = build_user(Role.TEAM_MEMBER)
        self.other_member = build_user(Role.TEAM_MEMBER)
        self.project = build_project(manager_id=self.manager.id, team_members=[self.member.id])
        self.task = build_task(self.project.id, assigned_to=[self.member.id, self.other_member.id])

    def test_task_created_notifies_actor_manager_and_assignees_once(self, mock_create_many):
        admin = build_user(Role.ADMIN)

        NotificationService.notify_task_created(self.task, self.project, admin)

        self.assertEqual(
            recipients_of(mock_create_many),
            [str(admin.id), str(self.manager.id), str(self.member.id), str(self.other_member.id)],
        )
        notifications = mock_create_many.call_args[0][0]
        self.assertTrue(all(n.type == NotificationType.TASK_CREATED.value for n in notifications))
        self.assertEqual(notifications[-1].priority, NotificationPriority.HIGH.value)

    def test_manager_acting_is_not_notified_twice(self, mock_create_many):
        self.task.assignedTo.append(self.manager.id)

        NotificationService.notify_task_updated(self.task, self.project, self.manager)

        recipients = recipients_of(mock_create_many)
        self.assertEqual(recipients.count(str(self.manager.id)), 1)
        self.assertEqual(len(recipients), len(set(recipients)))

    def test_assignee_acting_receives_only_self_notification(self, mock_create_many):
        NotificationService.notify_task_updated(self.task, self.project, self.member)

        recipients = recipients_of(mock_create_many)
        self.assertEqual(recipients.count(str(self.member.id)), 1)
        self.assertIn(str(self.manager.id), recipients)
        self.assertIn(str(self.other_member.id), recipients)

    def test_project_without_manager_skips_manager_notification(self, mock_create_many):
        project = build_project(manager_id=None)
        task = build_task(project.id, assigned_to=[self.member.id])

        NotificationService.notify_task_deleted(task, project, self.manager)

        self.assertEqual(recipients_of(mock_create_many), [str(self.manager.id), str(self.member.id)])

    def test_task_completed_goes_to_project_manager_only(self, mock_create_many):
        NotificationService.notify_task_completed(self.task, self.project, self.member)

        self.assertEqual(recipients_of(mock_create_many), [str(self.manager.id)])
        notification = mock_create_many.call_args[0][0][0]
        self.assertEqual(notification.type, NotificationType.TASK_COMPLETED.value)
        self.assertEqual(notification.relatedTask, self.task.id)

    def test_task_completed_by_manager_writes_nothing(self, mock_create_many):
        result = NotificationService.notify_task_completed(self.task, self.project, self.manager)

        self.assertEqual(result, [])
        mock_create_many.assert_not_called()


@patch("taskpilot.services.notification_service.NotificationRepository.create_many", side_effect=lambda n: n)
class ProjectNotificationTests(TestCase):
    def setUp(self):
        self.admin = build_user(Role.ADMIN)
        self.manager = build_user(Role.MANAGER)
        self.members = [build_user(Role.TEAM_MEMBER) for _ in range(2)]
        self.project = build_project(
            manager_id=self.manager.id, team_members=[self.manager.id] + [m.id for m in self.members]
        )

    def test_project_created_notifies_actor_and_each_member_once(self, mock_create_many):
        NotificationService.notify_project_created(self.project, self.manager)

        recipients = recipients_of(mock_create_many)
        self.assertEqual(recipients, [str(self.manager.id)] + [str(m.id) for m in self.members])
        notifications = mock_create_many.call_args[0][0]
        self.assertTrue(all(n.relatedProject == self.project.id for n in notifications))

    def test_project_deleted_carries_no_project_reference(self, mock_create_many):
        NotificationService.notify_project_deleted(self.project, self.admin)

        notifications = mock_create_many.call_args[0][0]
        self.assertTrue(all(n.relatedProject is None for n in notifications))
        self.assertEqual(len(notifications), 4)

    def test_comment_added_notifies_manager_and_members_but_not_author(self, mock_create_many):
        author = self.members[0]

        NotificationService.notify_comment_added(None, author, self.project)

        recipients = recipients_of(mock_create_many)
        self.assertNotIn(str(author.id), recipients)
        self.assertEqual(recipients, [str(self.manager.id), str(self.members[1].id)])

    def test_comment_deleted_notifies_manager_only(self, mock_create_many):
        NotificationService.notify_comment_deleted(None, self.admin, self.project)

        self.assertEqual(recipients_of(mock_create_many), [str(self.manager.id)])

    def test_manager_deleting_own_comment_writes_nothing(self, mock_create_many):
        NotificationService.notify_comment_deleted(None, self.manager, self.project)

        mock_create_many.assert_not_called()


@patch("taskpilot.services.notification_service.NotificationRepository.create_many", side_effect=lambda n: n)
class MiscNotificationTests(TestCase):
    def test_role_change_by_self_is_not_notified(self, mock_create_many):
        manager = build_user(Role.MANAGER)

        NotificationService.notify_role_changed(manager, manager, Role.TEAM_MEMBER.value)

        mock_create_many.assert_not_called()

    def test_new_message_skips_sender(self, mock_create_many):
        sender = build_user(Role.MANAGER)
        receiver = build_user(Role.TEAM_MEMBER)
        chat = ChatModel(chatId="chat_1_abc", participants=[sender.id, receiver.id])
        message = MessageModel(chatId=chat.chatId, sender=sender.id, content="hello")

        NotificationService.notify_new_message(message, sender, chat, chat.participants)

        self.assertEqual(recipients_of(mock_create_many), [str(receiver.id)])
        notification = mock_create_many.call_args[0][0][0]
        self.assertEqual(notification.relatedChat, "chat_1_abc")
        self.assertEqual(notification.message, "hello")


class NotificationFailureTests(TestCase):
    @patch("taskpilot.services.notification_service.NotificationRepository.create_many")
    def test_write_failure_is_logged_and_swallowed(self, mock_create_many):
        mock_create_many.side_effect = Exception("connection reset")
        user = build_user(Role.TEAM_MEMBER)

        with self.assertLogs("taskpilot.services.notification_service", level="ERROR"):
            result = NotificationService.notify_profile_updated(user)

        self.assertEqual(result, [])

    @patch("taskpilot.services.notification_service.NotificationRepository.create_many")
    @patch("taskpilot.services.notification_service.NotificationService._notification")
    def test_failure_while_building_documents_is_swallowed(self, mock_notification, mock_create_many):
        mock_notification.side_effect = ValueError("recipient is not a valid ObjectId")
        project = build_project()
        task = build_task(project.id)
        actor = build_user(Role.MANAGER)

        with self.assertLogs("taskpilot.services.notification_service", level="ERROR") as logs:
            result = NotificationService.notify_task_created(task, project, actor)

        self.assertEqual(result, [])
        self.assertIn("notify_task_created", logs.output[0])
        mock_create_many.assert_not_called()
