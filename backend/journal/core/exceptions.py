"""
Domain errors raised by services and mapped to HTTP responses in main.py.
"""
from fastapi import status


class JournalError(Exception):
    """Base class for errors a caller can act on."""
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Request failed"

    def __init__(self, detail: str = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotFound(JournalError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class NotOwner(JournalError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Not allowed to modify this resource"


class PinLimitExceeded(JournalError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "At most 3 diaries can be pinned"


class AlreadyExists(JournalError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Already exists"


class InvalidCredentials(JournalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Incorrect username or password"


class RegistrationDisabled(JournalError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Registration is disabled"


class ValidationFailed(JournalError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid input"
