from typing import Optional

from fastapi import status


class AppExceptionBase(Exception):
    """Base class for application-specific exceptions."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        code: str = "INTERNAL_SERVER_ERROR",
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class ConfigurationError(AppExceptionBase):
    """Raised when there's an issue with the application's configuration."""

    def __init__(self, message: str = "A configuration error occurred."):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, code="CONFIGURATION_ERROR")


class ExternalServiceError(AppExceptionBase):
    """Raised when an external service call fails."""

    def __init__(self, service_name: str, original_message: Optional[str] = None):
        message = f"An error occurred while communicating with {service_name}."
        if original_message:
            message += f" Details: {original_message}"
        self.service_name = service_name
        super().__init__(message=message, status_code=status.HTTP_502_BAD_GATEWAY, code="EXTERNAL_SERVICE_ERROR")


class AuthenticationError(AppExceptionBase):
    """Raised for authentication failures."""

    def __init__(self, message: str = "Authentication failed."):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED, code="AUTHENTICATION_ERROR")


class BadRequestError(AppExceptionBase):
    """Raised for malformed requests or invalid input."""

    def __init__(self, message: str = "Bad request. Please check your input."):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, code="BAD_REQUEST")
