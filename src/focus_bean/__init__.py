"""Focus Bean: Pomodoro-style focus timer with session history and streaks."""

__version__ = "1.0.0"
