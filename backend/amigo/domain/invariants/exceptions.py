from typing import Optional


class InvariantViolation(Exception):
    """A domain rule was broken. The operation must not be attempted."""


class ValidationError(InvariantViolation):
    """User input failed validation. ``field`` names the offending input."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class PermissionDenied(Exception):
    pass


class CollaboratorError(Exception):
    """Storage or persistence failed while serving a user action."""
