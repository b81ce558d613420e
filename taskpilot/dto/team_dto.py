from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from taskpilot.dto.user_dto import UserSummaryDTO


class CreateTeamDTO(BaseModel):
    name: str
    description: Optional[str] = None
    managerId: str


class TeamDTO(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    status: str
    admin: Optional[UserSummaryDTO] = None
    manager: Optional[UserSummaryDTO] = None
    members: List[UserSummaryDTO] = []
    createdAt: datetime
    updatedAt: Optional[datetime] = None


class SignupTeamDTO(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
