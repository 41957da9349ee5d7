"""
User Profile Models

The profile document written for every account and the custom claim derived
from its role.
"""

from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


DEFAULT_PROFILE_ROLE = "regular"


class ClaimRole(str, Enum):
    """
    Authorization tier published as the account's ``role`` custom claim.

    Only two tiers exist. ``from_profile_role`` maps exactly ``"staff"`` to
    STAFF; every other value, including a missing role and roles this service
    has never seen, maps to REGULAR.
    """
    STAFF = "staff"
    REGULAR = "regular"

    @classmethod
    def from_profile_role(cls, role: Any) -> "ClaimRole":
        if role == cls.STAFF.value:
            return cls.STAFF
        return cls.REGULAR

    def to_claims(self) -> Dict[str, str]:
        """Full custom claims object for this tier."""
        return {"role": self.value}


class UserProfile(BaseModel):
    """
    Profile document stored at ``<collection>/{uid}``.

    ``createdAt`` is not part of the model: each store stamps it with its own
    server-side clock when the document is written.
    """
    uid: str  # Identity provider account ID
    email: Optional[str] = None  # Copied at creation only
    displayName: Optional[str] = None  # Copied at creation only
    role: str = Field(default=DEFAULT_PROFILE_ROLE)

    class Config:
        json_schema_extra = {
            "example": {
                "uid": "u1",
                "email": "a@x.com",
                "displayName": None,
                "role": "regular"
            }
        }

    def to_document(self) -> Dict[str, Any]:
        """Document fields, with absent optionals stored as explicit nulls."""
        return self.model_dump()
