"""Utility helper functions."""

from app.utils.helpers import get_summary, host, time_taken, today_str

__all__ = [
    "get_summary",
    "host",
    "time_taken",
    "today_str",
]
