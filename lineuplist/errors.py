class LineupError(Exception):
    """Base for errors that end a page request with a short plain-text reply."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(LineupError):
    """Missing or unusable query params, or no such festival edition."""


class MissingSessionError(LineupError):
    """A page that needs session data was hit before /customize."""
