"""Activity tracking for open windows."""

from tidytabs.activity.idle import IdleCompensator
from tidytabs.activity.store import ActivityStore

__all__ = [
    "ActivityStore",
    "IdleCompensator",
]
