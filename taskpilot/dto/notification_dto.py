from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from taskpilot.dto.user_dto import UserSummaryDTO
from taskpilot.models.notification import NotificationModel


class NotificationDTO(BaseModel):
    id: str
    recipient: str
    sender: Optional[UserSummaryDTO] = None
    type: str
    title: str
    message: str
    relatedProject: Optional[str] = None
    relatedTask: Optional[str] = None
    relatedContact: Optional[str] = None
    relatedChat: Optional[str] = None
    isRead: bool
    priority: str
    createdAt: datetime

    @classmethod
    def from_model(cls, notification: NotificationModel, sender: UserSummaryDTO | None = None):
        return cls(
            id=str(notification.id),
            recipient=str(notification.recipient),
            sender=sender,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            relatedProject=str(notification.relatedProject) if notification.relatedProject else None,
            relatedTask=str(notification.relatedTask) if notification.relatedTask else None,
            relatedContact=str(notification.relatedContact) if notification.relatedContact else None,
            relatedChat=notification.relatedChat,
            isRead=notification.isRead,
            priority=notification.priority,
            createdAt=notification.createdAt,
        )
