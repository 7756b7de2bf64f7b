"""
Activity Log Use Cases
"""

from .list_activity_events_use_case import ListActivityEventsUseCase

__all__ = [
    "ListActivityEventsUseCase",
]
