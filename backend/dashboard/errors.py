class DashboardError(Exception):
    """Base class for errors raised by the query and mutation services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(DashboardError):
    """Form input was rejected; nothing was sent to the database."""

    def __init__(self, errors: dict[str, list[str]], message: str):
        super().__init__(message)
        self.errors = errors


class StorageError(DashboardError):
    pass


class NotFoundError(DashboardError):
    pass


class AuthError(DashboardError):
    pass
