from datetime import datetime

from pydantic import Field

from taskpilot.models.common.document import SubDocument, utc_now
from taskpilot.models.common.pyobjectid import PyObjectId


class CommentModel(SubDocument):
    text: str
    author: PyObjectId
    createdAt: datetime = Field(default_factory=utc_now)


class AttachmentModel(SubDocument):
    filename: str
    path: str
    uploadedAt: datetime = Field(default_factory=utc_now)
    uploadedBy: PyObjectId | None = None
