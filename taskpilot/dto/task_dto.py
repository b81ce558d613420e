from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

from taskpilot.dto.comment_dto import AttachmentDTO, CommentDTO
from taskpilot.dto.project_dto import ProjectReferenceDTO
from taskpilot.dto.user_dto import UserSummaryDTO


class CreateTaskDTO(BaseModel):
    title: str
    description: Optional[str] = None
    project: str
    assignedTo: List[str] = []
    status: Optional[str] = None
    priority: Optional[str] = None
    dueDate: Optional[datetime] = None


class TaskDTO(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    project: Optional[ProjectReferenceDTO] = None
    assignedTo: List[UserSummaryDTO] = []
    status: str
    priority: str
    dueDate: Optional[datetime] = None
    comments: List[CommentDTO] = []
    attachments: List[AttachmentDTO] = []
    createdAt: datetime
    updatedAt: Optional[datetime] = None
