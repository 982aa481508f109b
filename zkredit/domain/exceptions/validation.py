"""Input and configuration domain exceptions."""

from .base import DomainException


class ValidationError(DomainException):
    """Raised when an amount, address or request violates a business rule."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, code=code)


class ConfigurationError(DomainException):
    """Raised when required ledger configuration is missing or malformed."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
        )
