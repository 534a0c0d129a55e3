from __future__ import annotations

"""Formatting helpers for countdown displays and statistics labels."""

SECONDS_PER_MINUTE = 60


def _require_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative, was: {value}")


def format_seconds(total_seconds: int) -> str:
    """``MM:SS``; minutes are not wrapped into hours (``90:00`` for 90 minutes)."""
    _require_non_negative("total_seconds", total_seconds)
    minutes, seconds = divmod(total_seconds, SECONDS_PER_MINUTE)
    return f"{minutes:02d}:{seconds:02d}"


def format_seconds_readable(total_seconds: int) -> str:
    _require_non_negative("total_seconds", total_seconds)
    minutes, seconds = divmod(total_seconds, SECONDS_PER_MINUTE)
    return f"{minutes} min {seconds} sec"


def minutes_to_seconds(minutes: int) -> int:
    _require_non_negative("minutes", minutes)
    return minutes * SECONDS_PER_MINUTE


def seconds_to_minutes(seconds: int) -> int:
    _require_non_negative("seconds", seconds)
    return seconds // SECONDS_PER_MINUTE


def format_minutes(minutes: int) -> str:
    _require_non_negative("minutes", minutes)
    return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"


__all__ = [
    "format_seconds",
    "format_seconds_readable",
    "minutes_to_seconds",
    "seconds_to_minutes",
    "format_minutes",
]
