"""
Database models for PinMap Backend

All models should be imported here so Base.metadata sees them.
"""
from pinmap.models.user import User
from pinmap.models.pin import Pin, Category
from pinmap.models.social import Friendship
from pinmap.models.sharing import SharedPin, SharedCategory

__all__ = [
    # User
    "User",
    # Pins
    "Pin",
    "Category",
    # Social
    "Friendship",
    # Sharing
    "SharedPin",
    "SharedCategory",
]
