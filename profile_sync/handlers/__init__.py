"""
Authentication and request handlers for the Profile Sync Bridge.
"""

from .auth import verify_bearer_token

__all__ = ["verify_bearer_token"]
