from typing import Optional


class BackendError(Exception):
    """A call to the NL→SQL backend failed; `message` is safe to show users"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnauthorizedError(BackendError):
    """The backend answered 401; the session is missing or expired"""


class UploadValidationError(ValueError):
    pass
