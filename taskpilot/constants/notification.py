from enum import Enum


class NotificationType(Enum):
    TASK_CREATED = "TASK_CREATED"
    TASK_UPDATED = "TASK_UPDATED"
    TASK_DELETED = "TASK_DELETED"
    TASK_COMPLETED = "TASK_COMPLETED"
    PROJECT_CREATED = "PROJECT_CREATED"
    PROJECT_UPDATED = "PROJECT_UPDATED"
    PROJECT_DELETED = "PROJECT_DELETED"
    PROJECT_COMPLETED = "PROJECT_COMPLETED"
    COMMENT_ADDED = "COMMENT_ADDED"
    COMMENT_DELETED = "COMMENT_DELETED"
    ATTACHMENT_ADDED = "ATTACHMENT_ADDED"
    ATTACHMENT_DELETED = "ATTACHMENT_DELETED"
    PROFILE_UPDATED = "PROFILE_UPDATED"
    MEMBER_ADDED = "MEMBER_ADDED"
    MEMBER_REMOVED = "MEMBER_REMOVED"
    ROLE_CHANGED = "ROLE_CHANGED"
    TEAM_CREATED = "TEAM_CREATED"
    TEAM_MEMBER_JOINED = "TEAM_MEMBER_JOINED"
    PROJECT_DELETED_BY_MANAGER = "PROJECT_DELETED_BY_MANAGER"
    NEW_USER_SIGNUP = "NEW_USER_SIGNUP"
    CONTACT_FORM_SUBMITTED = "CONTACT_FORM_SUBMITTED"
    NEW_MESSAGE = "NEW_MESSAGE"


class NotificationPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
