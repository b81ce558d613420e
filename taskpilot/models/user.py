from pydantic import Field, EmailStr
from typing import ClassVar, Literal
from datetime import datetime

from taskpilot.constants.role import Role
from taskpilot.models.common.document import Document, utc_now
from taskpilot.models.common.pyobjectid import PyObjectId


class UserModel(Document):
    """
    Registered account. `password` always holds a hash, never the raw value.
    """

    collection_name: ClassVar[str] = "users"

    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str
    role: Role = Role.TEAM_MEMBER
    bio: str | None = None
    dateOfBirth: datetime | None = None
    position: str | None = None
    gender: Literal["Male", "Female", "Other"] | None = None
    profilePicture: str | None = None
    teamId: PyObjectId | None = None
    isProtectedAccount: bool = False
    resetPasswordToken: str | None = None
    resetPasswordExpires: datetime | None = None
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)
