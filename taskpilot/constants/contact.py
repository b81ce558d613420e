from enum import Enum


class ContactStatus(Enum):
    UNREAD = "unread"
    READ = "read"
    REPLIED = "replied"
