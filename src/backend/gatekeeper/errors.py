"""Gatekeeper error hierarchy.

The decision functions never raise; these errors belong to the session
boundary and the HTTP surface. The global exception handler in main.py
converts them to structured JSON responses with a request_id.
"""


class GatekeeperError(Exception):
    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(GatekeeperError):
    status_code = 404
    code = "NOT_FOUND"


class ForbiddenError(GatekeeperError):
    status_code = 403
    code = "FORBIDDEN"


class AccessDeniedError(ForbiddenError):
    code = "ACCESS_DENIED"


class ValidationError(GatekeeperError):
    status_code = 422
    code = "VALIDATION_ERROR"


class PreconditionError(GatekeeperError):
    status_code = 409
    code = "PRECONDITION_FAILED"


class SessionUnavailableError(GatekeeperError):
    status_code = 503
    code = "SESSION_UNAVAILABLE"


class LoginRequired(Exception):
    """Raised by the page guard when navigation must go to the login page."""

    def __init__(self, location: str) -> None:
        super().__init__(location)
        self.location = location
