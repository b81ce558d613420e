from pydantic import BaseModel

from taskpilot.dto.team_dto import TeamDTO


class TeamResponse(BaseModel):
    message: str
    team: TeamDTO
