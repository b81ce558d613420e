class DomainValidationError(Exception):
    """
    Business rule violation on otherwise well formed input, e.g. an unknown
    team id at signup or a disallowed role transition.
    """

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class EmailDeliveryError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
