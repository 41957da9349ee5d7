"""
Profile Sync Models Package

Pydantic models for event payloads and profile documents.
"""

from .events import (
    AuthUserRecord,
    ProfileChangeEvent,
    EventAck,
    EventError,
)
from .profile import (
    ClaimRole,
    UserProfile,
    DEFAULT_PROFILE_ROLE,
)

__all__ = [
    "AuthUserRecord",
    "ProfileChangeEvent",
    "EventAck",
    "EventError",
    "ClaimRole",
    "UserProfile",
    "DEFAULT_PROFILE_ROLE",
]
