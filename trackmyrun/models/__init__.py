"""Database model exports."""

from .activity import Activity
from .gear import Gear
from .user import User

__all__ = [
    "Activity",
    "Gear",
    "User",
]
