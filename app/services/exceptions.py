"""Exceptions for the pastebin service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class PasteError(ServiceError):
    """Base exception for paste-related errors."""
    pass


class PasteValidationError(PasteError):
    """Paste input failed validation checks."""
    pass


class PasteCreationError(PasteError):
    """Error occurred during paste creation."""
    pass


class PasteNotFoundError(PasteError):
    """Paste does not exist, has expired, or has used up its views."""
    pass
