from enum import Enum


class TaskStatus(Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskPriority(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# The only field a Team Member may send when updating a task assigned to them.
TEAM_MEMBER_UPDATABLE_FIELDS = {"status"}

MANAGER_UPDATABLE_FIELDS = {"title", "description", "status", "priority", "dueDate", "assignedTo"}
