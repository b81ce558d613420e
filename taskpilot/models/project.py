from pydantic import Field
from typing import ClassVar, List
from datetime import datetime

from taskpilot.constants.project import ProjectStatus
from taskpilot.models.common.document import Document, utc_now
from taskpilot.models.common.embedded import AttachmentModel, CommentModel
from taskpilot.models.common.pyobjectid import PyObjectId


class ProjectModel(Document):
    collection_name: ClassVar[str] = "projects"

    name: str = Field(..., min_length=1)
    description: str | None = None
    status: ProjectStatus = ProjectStatus.PENDING
    deadline: datetime | None = None
    teamMembers: List[PyObjectId] = []
    projectManager: PyObjectId | None = None
    comments: List[CommentModel] = []
    attachments: List[AttachmentModel] = []
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)

    def is_member(self, user_id) -> bool:
        return any(str(member) == str(user_id) for member in self.teamMembers)

    def is_managed_by(self, user_id) -> bool:
        return self.projectManager is not None and str(self.projectManager) == str(user_id)
