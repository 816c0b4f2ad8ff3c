"""Domain-specific exceptions — framework-independent."""


class DashboardError(Exception):
    """Base class for every error the dashboard surfaces to the user."""


class ValidationError(DashboardError):
    """Raised by the form layer when required fields are missing or malformed.

    Always raised before any network call is issued.
    """

    def __init__(self, fields: list[str], message: str = "Please fill all required fields"):
        self.fields = list(fields)
        self.message = message
        super().__init__(f"{message}: {', '.join(self.fields)}" if self.fields else message)


class AuthenticationError(DashboardError):
    """Raised when a login attempt fails.

    Bad credentials and an unreachable server produce the same message so the
    user cannot tell which one happened.
    """

    def __init__(self, message: str = "Invalid username or password"):
        self.message = message
        super().__init__(message)


class AuthorizationError(DashboardError):
    """Raised when an authenticated call is answered with HTTP 401."""

    def __init__(self, message: str = "Your session has expired. Please login again."):
        self.message = message
        super().__init__(message)


class PermissionDeniedError(DashboardError):
    """Raised when the actor may not mutate records of the given barn."""

    def __init__(self, barn: str, message: str | None = None):
        self.barn = barn
        self.message = message or f"You are not allowed to manage records of barn '{barn}'"
        super().__init__(self.message)


class NetworkError(DashboardError):
    """Raised when the farm API is unreachable, times out or answers unexpectedly."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        prefix = f"[{status_code}] " if status_code is not None else ""
        super().__init__(f"{prefix}{message}")


class NotFoundError(DashboardError):
    """Raised when a referenced record no longer exists server-side."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class NotAuthenticatedError(DashboardError):
    """Raised when an operation needs an actor but the session is anonymous."""

    def __init__(self, message: str = "Authentication required"):
        self.message = message
        super().__init__(message)


class SubmissionInProgressError(DashboardError):
    """Raised when a mutating action is triggered while the previous one is in flight."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"'{action}' is already in progress")
