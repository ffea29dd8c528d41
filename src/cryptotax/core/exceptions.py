"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    status_code: int = 500

    def __init__(self, message: str, code: str = "APP_ERROR", status_code: Optional[int] = None):
        self.message = message
        self.code = code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class AuthenticationError(AppError):
    """Raised when the bearer token is missing or cannot be decoded."""

    status_code = 401

    def __init__(self, message: str):
        super().__init__(message, code="UNAUTHENTICATED")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class UpstreamError(AppError):
    """Raised when an external price source fails."""

    status_code = 502

    def __init__(self, service: str, reason: str):
        super().__init__(f"{service} request failed: {reason}", code="UPSTREAM_ERROR")


class StoreError(AppError):
    """Raised when the transaction store cannot be read or written."""

    status_code = 500

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Store operation '{operation}' failed: {reason}", code="STORE_ERROR")
