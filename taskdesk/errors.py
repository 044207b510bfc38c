"""Error taxonomy for the taskdesk API.

Every error carries the HTTP status it maps to at the request boundary, see
``taskdesk.middleware.errors``.
"""


class TaskDeskError(Exception):
    """Base exception for domain errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskDeskError):
    """Malformed or out-of-domain input."""

    status_code = 400
    default_message = "Invalid input"


class AuthenticationError(TaskDeskError):
    """Missing, invalid or expired credential."""

    status_code = 401
    default_message = "Unauthorized"


class AuthorizationError(TaskDeskError):
    """Valid identity acting on a resource it does not own."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(TaskDeskError):
    status_code = 404
    default_message = "Not found"


class ConflictError(TaskDeskError):
    """Duplicate value for a unique field."""

    status_code = 409
    default_message = "Conflict"


class DependencyError(TaskDeskError):
    """Storage (or another backing service) is unreachable."""

    status_code = 500
    default_message = "Storage unavailable"
