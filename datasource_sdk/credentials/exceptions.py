"""Custom exceptions for credential operations.

These exceptions provide specific error handling for the different ways the
stored credentials of a data source can fail to turn into a connection
descriptor.
"""

from typing import List, Optional


class CredentialError(Exception):
    """Base exception for credential operations.

    All credential-related exceptions inherit from this class,
    allowing for broad exception handling when needed.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a data source has no credentials on record.

    Example:
        >>> raise CredentialNotFoundError("No credentials on record.")
    """

    pass


class CredentialParseError(CredentialError):
    """Raised when decrypted credentials are not valid JSON.

    Example:
        >>> raise CredentialParseError("Failed to parse encrypted credentials")
    """

    pass


class CredentialValidationError(CredentialError):
    """Raised when parsed credentials don't match the engine's credential shape.

    Includes list of validation errors for detailed feedback.

    Attributes:
        message: Human-readable error message.
        errors: List of specific validation errors.

    Example:
        >>> raise CredentialValidationError(
        ...     "Invalid mysql credentials",
        ...     errors=["host: Field required"]
        ... )
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []
