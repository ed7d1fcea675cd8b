"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class AuthorizationError(ApplicationError):
    """Raised when a PIN is missing or wrong for a protected operation."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message, code="AUTHZ_FORBIDDEN")


class ConflictError(ApplicationError):
    """Raised when there is a state conflict."""

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message, code="RES_CONFLICT")


class RateLimitError(ApplicationError):
    """Raised when rate limit is exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after_seconds: int | None = None,
    ) -> None:
        self.retry_after_seconds = retry_after_seconds
        super().__init__(message, code="RATE_LIMITED")


class StorageError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Storage error") -> None:
        super().__init__(message, code="SYS_STORAGE_ERROR")


# =============================================================================
# Note policy errors
# =============================================================================


class ReservedTitleError(ApplicationError):
    """Raised when creating or renaming a note into the reserved title."""

    def __init__(self, message: str = "Title is reserved") -> None:
        super().__init__(message, code="NOTE_RESERVED_TITLE")


class ClipboardProtectedError(ApplicationError):
    """Raised when deleting, renaming or unpinning the clipboard note."""

    def __init__(self, message: str = "The clipboard note is protected") -> None:
        super().__init__(message, code="NOTE_CLIPBOARD_PROTECTED")


class NotHiddenError(ApplicationError):
    """Raised when unhiding a note that is already visible."""

    def __init__(self, message: str = "Note is not hidden") -> None:
        super().__init__(message, code="NOTE_NOT_HIDDEN")


class UnhideRequiresExplicitOperationError(ApplicationError):
    """Raised when a generic update tries to reveal a hidden note."""

    def __init__(
        self,
        message: str = "Hidden notes can only be revealed through the unhide operation",
    ) -> None:
        super().__init__(message, code="NOTE_UNHIDE_REQUIRES_UNHIDE")
