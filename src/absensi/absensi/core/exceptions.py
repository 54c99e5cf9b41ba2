from __future__ import annotations

from datetime import timedelta

from ..common.durations import format_remaining


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class InvalidRangeError(ValidationError):
    """Raised when a date range ends before it starts."""


class HolidayProviderError(Exception):
    """Raised by holiday providers when the upstream calendar cannot be read."""


class AttendanceStateError(DomainError):
    """Base for check-in/check-out transitions that are not allowed."""


class AlreadyCheckedInError(AttendanceStateError):
    def __init__(self, message: str = "Anda sudah melakukan absen masuk hari ini"):
        super().__init__(message)


class AlreadyCompletedError(AttendanceStateError):
    def __init__(self, message: str = "Anda sudah melakukan absen pulang hari ini"):
        super().__init__(message)


class NoCheckInYetError(AttendanceStateError):
    def __init__(self, message: str = "Anda belum melakukan absen masuk hari ini"):
        super().__init__(message)


class MinimumDurationNotMetError(AttendanceStateError):
    """Check-out attempted before the configured minimum work duration."""

    def __init__(self, remaining: timedelta, message: str | None = None):
        self.remaining = remaining
        if message is None:
            message = f"Belum bisa absen pulang, sisa waktu kerja {format_remaining(remaining)}"
        super().__init__(message)


class DayAlreadyClaimedError(DomainError):
    """A day already holds an attendance or permission record for the user."""
