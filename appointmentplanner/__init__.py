"""
Appointment planner domain types: priorities and time slots.
"""

__version__ = "0.1.0"
