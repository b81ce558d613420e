from enum import Enum


class ProjectStatus(Enum):
    NOT_STARTED = "Not Started"
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


DEFAULT_AVATAR_URL = "https://ui-avatars.com/api/?name={0}&background=random"
