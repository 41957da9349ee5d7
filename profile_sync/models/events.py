"""
Event Payload Models

Pydantic models for the events the host pushes to the bridge: account
creation from Firebase Authentication and profile document updates from
Cloud Firestore.
"""

from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, Field, validator


class AuthUserRecord(BaseModel):
    """
    Newly created identity provider account.

    Mirrors the subset of the Firebase Auth user record the bridge copies
    into the profile document. Other user record fields are ignored.
    """
    uid: str = Field(..., min_length=1)  # Firebase Auth UID
    email: Optional[str] = None
    displayName: Optional[str] = None

    class Config:
        extra = "ignore"
        json_schema_extra = {
            "example": {
                "uid": "u1",
                "email": "a@x.com",
                "displayName": "Alice Example"
            }
        }

    @validator("email", "displayName", pre=True)
    def blank_to_none(cls, v):
        # An empty string counts as absent
        if v == "":
            return None
        return v


class ProfileChangeEvent(BaseModel):
    """
    Update of a profile document.

    ``document`` is the triggering document path, either relative
    (``users/u1``) or a full resource name
    (``projects/p/databases/(default)/documents/users/u1``). Either snapshot
    may be missing when the host delivers a malformed event.
    """
    document: str = Field(..., min_length=1)
    before: Optional[Dict[str, Any]] = None  # Pre-update snapshot
    after: Optional[Dict[str, Any]] = None  # Post-update snapshot

    class Config:
        json_schema_extra = {
            "example": {
                "document": "users/u1",
                "before": {"uid": "u1", "role": "regular"},
                "after": {"uid": "u1", "role": "staff"}
            }
        }


class EventAck(BaseModel):
    """Completion signal returned to the host."""
    status: Literal["processed", "skipped"]
    handler: str
    uid: Optional[str] = None  # None when the event named no account
    detail: Optional[str] = None


class EventError(BaseModel):
    """
    Failure result returned to the host.

    Any non-2xx response makes the host treat the delivery as failed.
    """
    status: int  # HTTP status code
    detail: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "status": 500,
                "detail": "Failed to set custom claims for u1: permission denied"
            }
        }
