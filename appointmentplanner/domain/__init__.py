"""
Domain layer - Pure value types without external dependencies.
"""

from .exceptions import AppointmentPlannerError, InvalidIntervalError
from .local_day import LocalDay, LocalDayProtocol
from .priority import Priority
from .time_slot import Slot, TimeSlot

__all__ = [
    "AppointmentPlannerError",
    "InvalidIntervalError",
    "LocalDay",
    "LocalDayProtocol",
    "Priority",
    "Slot",
    "TimeSlot",
]
