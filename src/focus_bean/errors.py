from __future__ import annotations

"""Exception types raised by the timer core.

All validation errors derive from ``ValueError`` so callers that only care
about "bad input" can catch that, while UI code can report the richer
attributes (e.g. ``InvalidDuration.field``).
"""


class FocusBeanError(Exception):
    """Base class for all errors raised by focus_bean."""


class InvalidDuration(FocusBeanError, ValueError):
    def __init__(self, field: str, value: int, minimum: int, maximum: int) -> None:
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"{field} must be between {minimum} and {maximum}, was: {value}")


class InvalidSession(FocusBeanError, ValueError):
    pass


class InvalidRange(FocusBeanError, ValueError):
    pass


class InvalidArgument(FocusBeanError, ValueError):
    pass


__all__ = [
    "FocusBeanError",
    "InvalidDuration",
    "InvalidSession",
    "InvalidRange",
    "InvalidArgument",
]
