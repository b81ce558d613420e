from taskpilot.constants.messages import ConflictErrors


class ConflictError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class UserAlreadyExistsError(ConflictError):
    def __init__(self, message: str = ConflictErrors.USER_ALREADY_EXISTS):
        super().__init__(message)


class TeamNameTakenError(ConflictError):
    def __init__(self, message: str = ConflictErrors.TEAM_NAME_TAKEN):
        super().__init__(message)


class ManagerAlreadyAssignedError(ConflictError):
    def __init__(self, message: str = ConflictErrors.MANAGER_ALREADY_ASSIGNED):
        super().__init__(message)


class AlreadyTeamMemberError(ConflictError):
    def __init__(self, message: str = ConflictErrors.ALREADY_TEAM_MEMBER):
        super().__init__(message)
