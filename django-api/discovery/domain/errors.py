"""Domain error codes for the discovery module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_USER_ID = "INVALID_USER_ID"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidInputError(DomainError):
    """Raised when an input record is malformed (e.g. an event without a category)."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_INPUT,
            message="Invalid input",
        )
        object.__setattr__(self, "detail", detail)


class InvalidUserIdError(DomainError):
    """Raised when a user ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_USER_ID,
            message="Invalid user ID format",
        )


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        object.__setattr__(self, "event_id", event_id)


class ProfileNotFoundError(DomainError):
    """Raised by a profile store when a user has no stored profile."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found",
        )
        object.__setattr__(self, "user_id", user_id)


class InvalidStatusTransitionError(DomainError):
    """Raised when an event status change would move its lifecycle backwards."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS_TRANSITION,
            message=f"Cannot move event from {current} to {requested}",
        )
