from typing import List

from pydantic import BaseModel, ConfigDict, Field


class StatusCountDTO(BaseModel):
    status: str = Field(alias="_id")
    count: int

    model_config = ConfigDict(populate_by_name=True)


class DashboardStatsResponse(BaseModel):
    totalProjects: int
    totalTasks: int
    totalTeamMembers: int
    taskStatusBreakdown: List[StatusCountDTO]
