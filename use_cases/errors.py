"""Error kinds shared by the session, access and booking layers."""

from typing import Any, Optional, Sequence


class ClientError(Exception):
    """Base class for every error raised by the client layers."""


class AuthError(ClientError):
    def __init__(self, message: str, reason: str = "invalid_credentials"):
        super().__init__(message)
        self.message = message
        self.reason = reason


class AccessDenied(ClientError):
    def __init__(self, message: str, decision: Any = None):
        super().__init__(message)
        self.message = message
        self.decision = decision


class NetworkError(ClientError):
    """Backend unreachable or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


class NetworkTimeout(NetworkError):
    pass


class ValidationError(ClientError):
    """Local input rejected before any network call."""

    def __init__(self, message: str, errors: Sequence[str] = ()):
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors) or (message,)
