"""Exception types raised by loaders and the auth client."""


class CoachDashboardError(Exception):
    """Base class for dashboard errors."""


class SheetFetchError(CoachDashboardError):
    """A data source could not be read or did not return a table."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class AuthError(CoachDashboardError):
    """Login or signup was rejected; `message` is shown to the user as-is."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
