from pydantic import Field
from typing import ClassVar, List
from datetime import datetime

from taskpilot.constants.task import TaskPriority, TaskStatus
from taskpilot.models.common.document import Document, utc_now
from taskpilot.models.common.embedded import AttachmentModel, CommentModel
from taskpilot.models.common.pyobjectid import PyObjectId


class TaskModel(Document):
    collection_name: ClassVar[str] = "tasks"

    title: str = Field(..., min_length=1)
    description: str | None = None
    project: PyObjectId
    assignedTo: List[PyObjectId] = []
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    dueDate: datetime | None = None
    comments: List[CommentModel] = []
    attachments: List[AttachmentModel] = []
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)

    def is_assigned_to(self, user_id) -> bool:
        return any(str(assignee) == str(user_id) for assignee in self.assignedTo)
