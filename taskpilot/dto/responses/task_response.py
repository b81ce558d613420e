from pydantic import BaseModel

from taskpilot.dto.task_dto import TaskDTO


class TaskResponse(BaseModel):
    message: str
    task: TaskDTO
