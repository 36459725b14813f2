"""
Domain-specific exception hierarchy for the appointment planner.
"""


class AppointmentPlannerError(Exception):
    """Base class for all application-level errors."""


class InvalidIntervalError(AppointmentPlannerError, ValueError):
    """Raised when a time slot would end before it starts."""

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"End {end} must not be before start {start}")
