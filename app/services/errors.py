"""Domain errors raised by the service layer and mapped to HTTP responses."""


class NotFoundError(LookupError):
    """Requested record does not exist."""


class ValidationError(ValueError):
    """Input passed schema validation but violates a business rule."""


class ConflictError(Exception):
    """Operation clashes with records that already exist."""

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.details = details


class ForbiddenError(PermissionError):
    """Authenticated user may not perform the operation."""
