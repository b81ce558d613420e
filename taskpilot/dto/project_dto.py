from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

from taskpilot.dto.comment_dto import AttachmentDTO, CommentDTO
from taskpilot.dto.user_dto import UserSummaryDTO


class CreateProjectDTO(BaseModel):
    name: str
    description: Optional[str] = None
    status: Optional[str] = None
    deadline: Optional[datetime] = None
    teamMembers: List[str] = []
    projectManager: Optional[str] = None


class UpdateProjectDTO(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    deadline: Optional[datetime] = None
    teamMembers: Optional[List[str]] = None
    projectManager: Optional[str] = None


class ProjectReferenceDTO(BaseModel):
    id: str
    name: str


class ProjectDTO(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    status: str
    deadline: Optional[datetime] = None
    teamMembers: List[UserSummaryDTO] = []
    projectManager: Optional[UserSummaryDTO] = None
    comments: List[CommentDTO] = []
    attachments: List[AttachmentDTO] = []
    createdAt: datetime
    updatedAt: Optional[datetime] = None


class ProjectTeamMemberDTO(UserSummaryDTO):
    avatar: str
