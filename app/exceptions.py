"""Application exceptions shared by the device services."""


class AppException(Exception):
    """Base class for errors that carry a human-readable message."""

    kind = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationException(AppException):
    """A required parameter is missing or malformed."""
    kind = "invalid_input"


class UnauthorizedException(AppException):
    """No device record of the user carries the supplied password."""
    kind = "unauthorized"

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class NotFoundException(AppException):
    kind = "not_found"


class StoreError(AppException):
    """The device store could not complete an operation."""


class DeliveryError(AppException):
    """A single push delivery failed. Never escapes the dispatcher."""


class ConfigurationError(RuntimeError):
    """Required configuration is missing at startup."""
