from enum import Enum


class Role(Enum):
    ADMIN = "Admin"
    MANAGER = "Manager"
    TEAM_MEMBER = "Team Member"


DEFAULT_ROLE = Role.TEAM_MEMBER.value

ROLE_CHOICES = [role.value for role in Role]

# Roles a user may be moved between; Admin is never a source or target.
ASSIGNABLE_ROLES = [Role.TEAM_MEMBER.value, Role.MANAGER.value]

ALLOWED_ROLE_TRANSITIONS = {
    Role.TEAM_MEMBER.value: Role.MANAGER.value,
    Role.MANAGER.value: Role.TEAM_MEMBER.value,
}
