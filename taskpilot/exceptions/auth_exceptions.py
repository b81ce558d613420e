from taskpilot.constants.messages import AuthErrorMessages


class BaseAuthException(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class TokenExpiredError(BaseAuthException):
    def __init__(self, message: str = AuthErrorMessages.TOKEN_EXPIRED):
        super().__init__(message)


class TokenMissingError(BaseAuthException):
    def __init__(self, message: str = AuthErrorMessages.NO_ACCESS_TOKEN):
        super().__init__(message)


class TokenInvalidError(BaseAuthException):
    def __init__(self, message: str = AuthErrorMessages.TOKEN_INVALID):
        super().__init__(message)


class InvalidCredentialsError(BaseAuthException):
    """Wrong password on login. Rendered as 400 like the rest of the login validation."""

    def __init__(self, message: str = AuthErrorMessages.INVALID_CREDENTIALS):
        super().__init__(message)
