"""
Core Utilities.

Shared utility functions used across the backend.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive
    and assumed to be UTC. This keeps SQLite and PostgreSQL storage
    consistent.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
