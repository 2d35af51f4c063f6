"""Domain error taxonomy. Each error carries the HTTP status it maps to."""


class PlanHubError(Exception):
    """Base for errors surfaced to clients as {"error": message}."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(PlanHubError):
    """Missing or invalid request fields."""

    status_code = 400


class InvalidCredentials(PlanHubError):
    status_code = 401


class Unauthorized(PlanHubError):
    """No bearer token supplied."""

    status_code = 401


class InvalidToken(PlanHubError):
    """Bad signature, expired, or malformed token payload."""

    status_code = 401


class Forbidden(PlanHubError):
    status_code = 403


class NotFound(PlanHubError):
    status_code = 404


class Conflict(PlanHubError):
    """Duplicate resource (e.g. email already registered)."""

    status_code = 400


class InternalError(PlanHubError):
    status_code = 500


class StoreError(Exception):
    """Storage failure: unreadable/unwritable file or malformed document."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)
