from pydantic import Field
from typing import ClassVar
from datetime import datetime

from taskpilot.constants.notification import NotificationPriority, NotificationType
from taskpilot.models.common.document import Document, utc_now
from taskpilot.models.common.pyobjectid import PyObjectId


class NotificationModel(Document):
    collection_name: ClassVar[str] = "notifications"

    recipient: PyObjectId
    sender: PyObjectId
    type: NotificationType
    title: str
    message: str
    relatedProject: PyObjectId | None = None
    relatedTask: PyObjectId | None = None
    relatedContact: PyObjectId | None = None
    relatedChat: str | None = None
    isRead: bool = False
    priority: NotificationPriority = NotificationPriority.MEDIUM
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)
