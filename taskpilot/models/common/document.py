from datetime import datetime, timezone
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from taskpilot.models.common.pyobjectid import PyObjectId


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Document(BaseModel):
    """
    Base for every model stored in its own collection.
    """

    collection_name: ClassVar[str]

    id: PyObjectId | None = Field(None, alias="_id")

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True, extra="ignore")

    def to_document(self) -> dict:
        """Dict ready for insert_one: keeps ObjectIds and datetimes, drops an unset _id."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SubDocument(BaseModel):
    """
    Embedded array entry addressed by its own _id, e.g. comments and attachments.
    """

    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")

    model_config = ConfigDict(populate_by_name=True, validate_default=True)
