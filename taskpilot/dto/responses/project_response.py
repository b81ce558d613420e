from pydantic import BaseModel

from taskpilot.dto.project_dto import ProjectDTO


class ProjectResponse(BaseModel):
    message: str
    project: ProjectDTO
