"""Core utilities and shared functionality."""

from cryptotax.core.timezone import (
    now_utc,
    to_utc,
    to_reporting_tz,
    UTC,
)
from cryptotax.core.exceptions import (
    AppError,
    ValidationError,
    AuthenticationError,
    NotFoundError,
    UpstreamError,
    StoreError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "to_reporting_tz",
    "UTC",
    "AppError",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "UpstreamError",
    "StoreError",
]
