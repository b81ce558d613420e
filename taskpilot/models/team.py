from pydantic import Field, model_validator
from typing import ClassVar, List, Literal
from datetime import datetime

from taskpilot.models.common.document import Document, utc_now
from taskpilot.models.common.pyobjectid import PyObjectId


class TeamModel(Document):
    """
    Model for teams. The manager is always part of `members`.
    """

    collection_name: ClassVar[str] = "teams"

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    admin: PyObjectId
    manager: PyObjectId
    members: List[PyObjectId] = []
    status: Literal["active", "inactive"] = "active"
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def include_manager_in_members(self):
        if self.manager not in self.members:
            self.members = [self.manager, *self.members]
        return self
