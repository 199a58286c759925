"""
Custom exceptions for the application.
"""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Client-caused validation error."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "VALIDATION_ERROR")


class ConfigurationError(AppError):
    """Mandatory configuration is missing or unusable."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIGURATION_ERROR")
