"""Custom exception classes for the MathWizard backend.

Each exception carries the HTTP status code the route layer answers with, so
managers can raise them directly and the application-level handler renders
them as ``{"success": false, "error": ...}``.
"""


class MathWizardError(Exception):
    """Base exception for all MathWizard errors."""

    status_code = 500

    def __init__(self, message: str):
        """Initialize the exception.

        Args:
            message: Human readable error, returned to the client as-is.
        """
        self.message = message
        super().__init__(message)


class ValidationError(MathWizardError):
    """Raised when request data is missing or malformed."""

    status_code = 400


class InvalidCredentialsError(MathWizardError):
    """Raised when a login attempt fails."""

    status_code = 401

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class ForbiddenError(MathWizardError):
    """Raised when the caller does not own the targeted resource."""

    status_code = 403


class UnverifiedError(MathWizardError):
    """Raised when an account exists but its email is not verified."""

    status_code = 403

    def __init__(self, message: str = "Email not verified"):
        super().__init__(message)


class NotFoundError(MathWizardError):
    """Raised when a requested entity cannot be found."""

    status_code = 404


class ConflictError(MathWizardError):
    """Raised when a uniqueness constraint would be violated."""

    status_code = 409


class QuotaExceededError(MathWizardError):
    """Raised when a parent has no child slots left."""

    status_code = 400


class LimitExceededError(QuotaExceededError):
    """Raised when a partner roster is already full."""

    pass


class InternalError(MathWizardError):
    """Raised when an unexpected failure happens, e.g. the store is unavailable."""

    status_code = 500
