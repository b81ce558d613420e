from taskpilot.constants.messages import NotFoundErrors


class ResourceNotFoundError(Exception):
    path_param: str | None = None

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class UserNotFoundError(ResourceNotFoundError):
    path_param = "user_id"

    def __init__(self, message: str = NotFoundErrors.USER_NOT_FOUND):
        super().__init__(message)


class TeamNotFoundError(ResourceNotFoundError):
    path_param = "team_id"

    def __init__(self, message: str = NotFoundErrors.TEAM_NOT_FOUND):
        super().__init__(message)


class ProjectNotFoundError(ResourceNotFoundError):
    path_param = "project_id"

    def __init__(self, message: str = NotFoundErrors.PROJECT_NOT_FOUND):
        super().__init__(message)


class TaskNotFoundError(ResourceNotFoundError):
    path_param = "task_id"

    def __init__(self, message: str = NotFoundErrors.TASK_NOT_FOUND):
        super().__init__(message)


class CommentNotFoundError(ResourceNotFoundError):
    path_param = "comment_id"

    def __init__(self, message: str = NotFoundErrors.COMMENT_NOT_FOUND):
        super().__init__(message)


class AttachmentNotFoundError(ResourceNotFoundError):
    path_param = "attachment_id"

    def __init__(self, message: str = NotFoundErrors.ATTACHMENT_NOT_FOUND):
        super().__init__(message)


class ChatNotFoundError(ResourceNotFoundError):
    path_param = "chat_id"

    def __init__(self, message: str = NotFoundErrors.CHAT_NOT_FOUND):
        super().__init__(message)


class MessageNotFoundError(ResourceNotFoundError):
    path_param = "message_id"

    def __init__(self, message: str = NotFoundErrors.MESSAGE_NOT_FOUND):
        super().__init__(message)


class NotificationNotFoundError(ResourceNotFoundError):
    path_param = "notification_id"

    def __init__(self, message: str = NotFoundErrors.NOTIFICATION_NOT_FOUND):
        super().__init__(message)


class ContactNotFoundError(ResourceNotFoundError):
    path_param = "contact_id"

    def __init__(self, message: str = NotFoundErrors.CONTACT_NOT_FOUND):
        super().__init__(message)
