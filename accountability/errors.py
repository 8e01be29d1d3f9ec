"""Named errors raised by the accountability engine."""

from typing import Any, Optional


class AccountabilityError(Exception):
    """Base class for all engine errors."""

    code = "accountability_error"

    def __init__(self, message: str, *, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class InvalidTaskDataError(AccountabilityError, ValueError):
    """Raised when a task row carries a value outside its closed set."""

    code = "invalid_task_data"

    def __init__(self, field_name: str, value: Any, allowed: Optional[list] = None):
        message = f"Unrecognized {field_name}: {value!r}"
        if allowed:
            message += f" (expected one of {', '.join(allowed)})"
        super().__init__(message)
        self.field_name = field_name
        self.value = value


class UnknownFrequencyError(InvalidTaskDataError):
    code = "unknown_frequency"


class UnknownLevelError(InvalidTaskDataError):
    """Importance or difficulty outside medium/high/maximum."""

    code = "unknown_level"


class UnknownTaskTypeError(InvalidTaskDataError):
    code = "unknown_task_type"


class InvalidDateError(AccountabilityError, ValueError):
    """Raised when a date string is not a canonical YYYY-MM-DD value."""

    code = "invalid_date"
