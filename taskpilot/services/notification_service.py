import functools
import logging
from typing import Iterable, List, Optional

from django.conf import settings

from taskpilot.constants.messages import NotificationMessages, RepositoryErrors
from taskpilot.constants.notification import NotificationPriority, NotificationType
from taskpilot.dto.notification_dto import NotificationDTO
from taskpilot.dto.user_dto import UserSummaryDTO
from taskpilot.exceptions.not_found_exceptions import NotificationNotFoundError
from taskpilot.models.chat import ChatModel
from taskpilot.models.contact import ContactModel
from taskpilot.models.message import MessageModel
from taskpilot.models.notification import NotificationModel
from taskpilot.models.project import ProjectModel
from taskpilot.models.task import TaskModel
from taskpilot.models.team import TeamModel
from taskpilot.models.user import UserModel
from taskpilot.repositories.notification_repository import NotificationRepository
from taskpilot.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def best_effort(notify):
    """
    Notifications never fail the domain write that triggered them. Any error
    while building or writing them is logged and the call returns no documents.
    """

    @functools.wraps(notify)
    def wrapper(cls, *args, **kwargs):
        try:
            return notify(cls, *args, **kwargs)
        except Exception as e:
            logger.error(RepositoryErrors.NOTIFICATION_WRITE_FAILED.format(notify.__name__, str(e)))
            return []

    return wrapper


def unique_recipients(candidates: Iterable, exclude: Iterable = ()) -> List:
    """
    Order preserving de-duplication of recipient ids. `None` entries and
    anything in `exclude` are dropped.
    """
    seen = {str(excluded) for excluded in exclude if excluded is not None}
    recipients = []
    for candidate in candidates:
        if candidate is None or str(candidate) in seen:
            continue
        seen.add(str(candidate))
        recipients.append(candidate)
    return recipients


class NotificationService:
    """
    Translates domain events into notification documents. Each `notify_*`
    computes its recipient set and writes one document per recipient in a
    single insert. Delivery is best effort: failures are logged and never
    reach the caller, and nothing is retried.
    """

    @classmethod
    def _notification(
        cls,
        recipient,
        sender,
        notification_type: NotificationType,
        title: str,
        message: str,
        priority: NotificationPriority = NotificationPriority.MEDIUM,
        **related,
    ) -> NotificationModel:
        return NotificationModel(
            recipient=recipient,
            sender=sender,
            type=notification_type,
            title=title,
            message=message,
            priority=priority,
            **{key: value for key, value in related.items() if value is not None},
        )

    @classmethod
    def _send(cls, notifications: List[NotificationModel]) -> List[NotificationModel]:
        if not notifications:
            return []
        return NotificationRepository.create_many(notifications)

    @staticmethod
    def _subject(project: ProjectModel, task: Optional[TaskModel]) -> str:
        if task is not None:
            return NotificationMessages.TASK_SUBJECT.format(task.title)
        return NotificationMessages.PROJECT_SUBJECT.format(project.name)

    @classmethod
    def _task_event(
        cls,
        event: NotificationType,
        task: TaskModel,
        project: Optional[ProjectModel],
        actor: UserModel,
        self_title: str,
        self_message: str,
        manager_title: str,
        manager_message: str,
        assignee_title: str,
        assignee_message: str,
        priority: NotificationPriority,
        assignee_priority: NotificationPriority,
    ) -> List[NotificationModel]:
        related = {"relatedProject": task.project, "relatedTask": task.id}
        notifications = [cls._notification(actor.id, actor.id, event, self_title, self_message, priority, **related)]

        project_manager = project.projectManager if project else None
        for recipient in unique_recipients([project_manager], exclude=[actor.id]):
            notifications.append(
                cls._notification(recipient, actor.id, event, manager_title, manager_message, priority, **related)
            )
        for recipient in unique_recipients(task.assignedTo, exclude=[actor.id, project_manager]):
            notifications.append(
                cls._notification(
                    recipient, actor.id, event, assignee_title, assignee_message, assignee_priority, **related
                )
            )
        return cls._send(notifications)

    @classmethod
    @best_effort
    def notify_task_created(cls, task: TaskModel, project: Optional[ProjectModel], actor: UserModel):
        return cls._task_event(
            NotificationType.TASK_CREATED,
            task,
            project,
            actor,
            NotificationMessages.TASK_CREATED_SELF_TITLE,
            NotificationMessages.TASK_CREATED_SELF.format(task.title),
            NotificationMessages.TASK_CREATED_MANAGER_TITLE,
            NotificationMessages.TASK_CREATED_MANAGER.format(actor.name, task.title, project.name if project else ""),
            NotificationMessages.TASK_ASSIGNED_TITLE,
            NotificationMessages.TASK_ASSIGNED.format(actor.name, task.title),
            NotificationPriority.MEDIUM,
            NotificationPriority.HIGH,
        )

    @classmethod
    @best_effort
    def notify_task_updated(cls, task: TaskModel, project: Optional[ProjectModel], actor: UserModel):
        return cls._task_event(
            NotificationType.TASK_UPDATED,
            task,
            project,
            actor,
            NotificationMessages.TASK_UPDATED_SELF_TITLE,
            NotificationMessages.TASK_UPDATED_SELF.format(task.title),
            NotificationMessages.TASK_UPDATED_TITLE,
            NotificationMessages.TASK_UPDATED_MANAGER.format(actor.name, task.title),
            NotificationMessages.TASK_UPDATED_TITLE,
            NotificationMessages.TASK_UPDATED_ASSIGNEE.format(actor.name, task.title),
            NotificationPriority.MEDIUM,
            NotificationPriority.MEDIUM,
        )

    @classmethod
    @best_effort
    def notify_task_deleted(cls, task: TaskModel, project: Optional[ProjectModel], actor: UserModel):
        return cls._task_event(
            NotificationType.TASK_DELETED,
            task,
            project,
            actor,
            NotificationMessages.TASK_DELETED_SELF_TITLE,
            NotificationMessages.TASK_DELETED_SELF.format(task.title),
            NotificationMessages.TASK_DELETED_TITLE,
            NotificationMessages.TASK_DELETED_MANAGER.format(actor.name, task.title),
            NotificationMessages.TASK_DELETED_TITLE,
            NotificationMessages.TASK_DELETED_ASSIGNEE.format(actor.name, task.title),
            NotificationPriority.HIGH,
            NotificationPriority.HIGH,
        )

    @classmethod
    @best_effort
    def notify_task_completed(cls, task: TaskModel, project: Optional[ProjectModel], actor: UserModel):
        project_manager = project.projectManager if project else None
        notifications = [
            cls._notification(
                recipient,
                actor.id,
                NotificationType.TASK_COMPLETED,
                NotificationMessages.TASK_COMPLETED_TITLE,
                NotificationMessages.TASK_COMPLETED.format(actor.name, task.title),
                relatedProject=task.project,
                relatedTask=task.id,
            )
            for recipient in unique_recipients([project_manager], exclude=[actor.id])
        ]
        return cls._send(notifications)

    @classmethod
    def _project_event(
        cls,
        event: NotificationType,
        project: ProjectModel,
        actor: UserModel,
        self_title: str,
        self_message: str,
        peer_title: str,
        peer_message: str,
        priority: NotificationPriority,
        related_project=None,
    ) -> List[NotificationModel]:
        notifications = [
            cls._notification(
                actor.id, actor.id, event, self_title, self_message, priority, relatedProject=related_project
            )
        ]
        for recipient in unique_recipients(project.teamMembers, exclude=[actor.id]):
            notifications.append(
                cls._notification(
                    recipient, actor.id, event, peer_title, peer_message, priority, relatedProject=related_project
                )
            )
        return cls._send(notifications)

    @classmethod
    @best_effort
    def notify_project_created(cls, project: ProjectModel, actor: UserModel):
        return cls._project_event(
            NotificationType.PROJECT_CREATED,
            project,
            actor,
            NotificationMessages.PROJECT_CREATED_SELF_TITLE,
            NotificationMessages.PROJECT_CREATED_SELF.format(project.name),
            NotificationMessages.PROJECT_CREATED_TITLE,
            NotificationMessages.PROJECT_CREATED.format(actor.name, project.name),
            NotificationPriority.HIGH,
            related_project=project.id,
        )

    @classmethod
    @best_effort
    def notify_project_updated(cls, project: ProjectModel, actor: UserModel):
        return cls._project_event(
            NotificationType.PROJECT_UPDATED,
            project,
            actor,
            NotificationMessages.PROJECT_UPDATED_SELF_TITLE,
            NotificationMessages.PROJECT_UPDATED_SELF.format(project.name),
            NotificationMessages.PROJECT_UPDATED_TITLE,
            NotificationMessages.PROJECT_UPDATED.format(actor.name, project.name),
            NotificationPriority.MEDIUM,
            related_project=project.id,
        )

    @classmethod
    @best_effort
    def notify_project_deleted(cls, project: ProjectModel, actor: UserModel):
        # The project no longer exists, so no relatedProject reference is stored.
        return cls._project_event(
            NotificationType.PROJECT_DELETED,
            project,
            actor,
            NotificationMessages.PROJECT_DELETED_SELF_TITLE,
            NotificationMessages.PROJECT_DELETED_SELF.format(project.name),
            NotificationMessages.PROJECT_DELETED_TITLE,
            NotificationMessages.PROJECT_DELETED.format(actor.name, project.name),
            NotificationPriority.HIGH,
        )

    @classmethod
    @best_effort
    def notify_project_deleted_by_manager(cls, project: ProjectModel, actor: UserModel, admin: UserModel):
        notifications = [
            cls._notification(
                recipient,
                actor.id,
                NotificationType.PROJECT_DELETED_BY_MANAGER,
                NotificationMessages.PROJECT_DELETED_BY_MANAGER_TITLE,
                NotificationMessages.PROJECT_DELETED.format(actor.name, project.name),
                NotificationPriority.HIGH,
            )
            for recipient in unique_recipients([admin.id], exclude=[actor.id])
        ]
        return cls._send(notifications)

    @classmethod
    def _manager_and_members(
        cls,
        event: NotificationType,
        actor: UserModel,
        project: ProjectModel,
        task: Optional[TaskModel],
        title: str,
        message: str,
        priority: NotificationPriority,
        include_members: bool,
    ) -> List[NotificationModel]:
        """
        The project manager (when there is one) plus, optionally, the project's
        team members. The actor is always excluded and nobody is notified twice.
        """
        candidates = [project.projectManager]
        if include_members:
            candidates.extend(project.teamMembers)
        notifications = [
            cls._notification(
                recipient,
                actor.id,
                event,
                title,
                message,
                priority,
                relatedProject=project.id,
                relatedTask=task.id if task else None,
            )
            for recipient in unique_recipients(candidates, exclude=[actor.id])
        ]
        return cls._send(notifications)

    @classmethod
    @best_effort
    def notify_comment_added(cls, comment, actor: UserModel, project: ProjectModel, task: Optional[TaskModel] = None):
        return cls._manager_and_members(
            NotificationType.COMMENT_ADDED,
            actor,
            project,
            task,
            NotificationMessages.COMMENT_ADDED_TITLE,
            NotificationMessages.COMMENT_ADDED.format(actor.name, cls._subject(project, task)),
            NotificationPriority.LOW,
            include_members=True,
        )

    @classmethod
    @best_effort
    def notify_comment_deleted(
        cls, comment, actor: UserModel, project: ProjectModel, task: Optional[TaskModel] = None
    ):
        return cls._manager_and_members(
            NotificationType.COMMENT_DELETED,
            actor,
            project,
            task,
            NotificationMessages.COMMENT_DELETED_TITLE,
            NotificationMessages.COMMENT_DELETED.format(actor.name, cls._subject(project, task)),
            NotificationPriority.LOW,
            include_members=False,
        )

    @classmethod
    @best_effort
    def notify_attachment_added(
        cls, attachment, actor: UserModel, project: ProjectModel, task: Optional[TaskModel] = None
    ):
        return cls._manager_and_members(
            NotificationType.ATTACHMENT_ADDED,
            actor,
            project,
            task,
            NotificationMessages.ATTACHMENT_ADDED_TITLE,
            NotificationMessages.ATTACHMENT_ADDED.format(actor.name, attachment.filename, cls._subject(project, task)),
            NotificationPriority.MEDIUM,
            include_members=True,
        )

    @classmethod
    @best_effort
    def notify_attachment_deleted(
        cls, attachment, actor: UserModel, project: ProjectModel, task: Optional[TaskModel] = None
    ):
        return cls._manager_and_members(
            NotificationType.ATTACHMENT_DELETED,
            actor,
            project,
            task,
            NotificationMessages.ATTACHMENT_DELETED_TITLE,
            NotificationMessages.ATTACHMENT_DELETED.format(
                actor.name, attachment.filename, cls._subject(project, task)
            ),
            NotificationPriority.MEDIUM,
            include_members=False,
        )

    @classmethod
    @best_effort
    def notify_profile_updated(cls, user: UserModel):
        notification = cls._notification(
            user.id,
            user.id,
            NotificationType.PROFILE_UPDATED,
            NotificationMessages.PROFILE_UPDATED_TITLE,
            NotificationMessages.PROFILE_UPDATED,
            NotificationPriority.LOW,
        )
        return cls._send([notification])

    @classmethod
    def _membership_event(
        cls,
        event: NotificationType,
        member_id,
        actor: UserModel,
        project: ProjectModel,
        task: Optional[TaskModel],
        title: str,
        template: str,
    ) -> List[NotificationModel]:
        notifications = [
            cls._notification(
                recipient,
                actor.id,
                event,
                title,
                template.format(actor.name, cls._subject(project, task)),
                relatedProject=project.id,
                relatedTask=task.id if task else None,
            )
            for recipient in unique_recipients([member_id], exclude=[actor.id])
        ]
        return cls._send(notifications)

    @classmethod
    @best_effort
    def notify_member_added(cls, member_id, actor: UserModel, project: ProjectModel, task: Optional[TaskModel] = None):
        return cls._membership_event(
            NotificationType.MEMBER_ADDED,
            member_id,
            actor,
            project,
            task,
            NotificationMessages.MEMBER_ADDED_TITLE,
            NotificationMessages.MEMBER_ADDED,
        )

    @classmethod
    @best_effort
    def notify_member_removed(
        cls, member_id, actor: UserModel, project: ProjectModel, task: Optional[TaskModel] = None
    ):
        return cls._membership_event(
            NotificationType.MEMBER_REMOVED,
            member_id,
            actor,
            project,
            task,
            NotificationMessages.MEMBER_REMOVED_TITLE,
            NotificationMessages.MEMBER_REMOVED,
        )

    @classmethod
    @best_effort
    def notify_role_changed(cls, user: UserModel, actor: UserModel, new_role: str):
        notifications = [
            cls._notification(
                recipient,
                actor.id,
                NotificationType.ROLE_CHANGED,
                NotificationMessages.ROLE_CHANGED_TITLE,
                NotificationMessages.ROLE_CHANGED.format(actor.name, new_role),
                NotificationPriority.HIGH,
            )
            for recipient in unique_recipients([user.id], exclude=[actor.id])
        ]
        return cls._send(notifications)

    @classmethod
    @best_effort
    def notify_team_created(cls, team: TeamModel, actor: UserModel):
        notification = cls._notification(
            actor.id,
            actor.id,
            NotificationType.TEAM_CREATED,
            NotificationMessages.TEAM_CREATED_TITLE,
            NotificationMessages.TEAM_CREATED.format(team.name),
        )
        return cls._send([notification])

    @classmethod
    @best_effort
    def notify_team_member_joined(cls, team: TeamModel, member: UserModel, recipient: UserModel):
        notifications = [
            cls._notification(
                recipient_id,
                member.id,
                NotificationType.TEAM_MEMBER_JOINED,
                NotificationMessages.TEAM_MEMBER_JOINED_TITLE,
                NotificationMessages.TEAM_MEMBER_JOINED.format(member.name, team.name),
            )
            for recipient_id in unique_recipients([recipient.id], exclude=[member.id])
        ]
        return cls._send(notifications)

    @classmethod
    @best_effort
    def notify_new_user_signup(cls, user: UserModel, admin: UserModel):
        notification = cls._notification(
            admin.id,
            user.id,
            NotificationType.NEW_USER_SIGNUP,
            NotificationMessages.NEW_USER_SIGNUP_TITLE,
            NotificationMessages.NEW_USER_SIGNUP.format(user.name, user.email, user.role),
        )
        return cls._send([notification])

    @classmethod
    @best_effort
    def notify_contact_form_submitted(cls, contact: ContactModel, admin: UserModel):
        # A public submission has no user behind it, so the admin is also the sender.
        notification = cls._notification(
            admin.id,
            admin.id,
            NotificationType.CONTACT_FORM_SUBMITTED,
            NotificationMessages.CONTACT_FORM_SUBMITTED_TITLE,
            NotificationMessages.CONTACT_FORM_SUBMITTED.format(contact.name, contact.email, contact.subject),
            NotificationPriority.HIGH,
            relatedContact=contact.id,
        )
        return cls._send([notification])

    @classmethod
    @best_effort
    def notify_new_message(cls, message: MessageModel, sender: UserModel, chat: ChatModel, participants: Iterable):
        notifications = [
            cls._notification(
                recipient,
                sender.id,
                NotificationType.NEW_MESSAGE,
                NotificationMessages.NEW_MESSAGE_TITLE.format(sender.name),
                message.content,
                NotificationPriority.LOW,
                relatedChat=chat.chatId,
            )
            for recipient in unique_recipients(participants, exclude=[sender.id])
        ]
        return cls._send(notifications)

    @classmethod
    def list_notifications(cls, recipient_id: str) -> List[NotificationDTO]:
        notifications = NotificationRepository.list_for_recipient(
            recipient_id, limit=settings.NOTIFICATIONS["LIST_LIMIT"]
        )
        sender_ids = list({str(notification.sender) for notification in notifications})
        senders = {str(user.id): UserSummaryDTO.from_model(user) for user in UserRepository.get_by_ids(sender_ids)}
        return [
            NotificationDTO.from_model(notification, senders.get(str(notification.sender)))
            for notification in notifications
        ]

    @classmethod
    def get_unread_count(cls, recipient_id: str) -> int:
        return NotificationRepository.unread_count(recipient_id)

    @classmethod
    def mark_as_read(cls, notification_id: str, recipient_id: str) -> NotificationDTO:
        notification = NotificationRepository.mark_read(notification_id, recipient_id)
        if notification is None:
            raise NotificationNotFoundError()
        return NotificationDTO.from_model(notification)

    @classmethod
    def mark_all_as_read(cls, recipient_id: str) -> int:
        return NotificationRepository.mark_all_read(recipient_id)

    @classmethod
    def delete_notification(cls, notification_id: str, recipient_id: str) -> None:
        if not NotificationRepository.delete(notification_id, recipient_id):
            raise NotificationNotFoundError()

    @classmethod
    def clear_notifications(cls, recipient_id: str) -> int:
        return NotificationRepository.delete_all(recipient_id)
