"""
Role Claim Sync

Re-derives the ``role`` custom claim when a profile document's role changes.
"""

import logging
from typing import Any, Dict, Optional

from ..models import ClaimRole

logger = logging.getLogger(__name__)


class RoleClaimSync:
    """
    Handler for the profile-updated trigger.

    Compares ``role`` in the pre- and post-update snapshots. When it changed,
    the account's custom claims are replaced with ``{"role": "staff"}`` if
    the new role is exactly ``"staff"`` and ``{"role": "regular"}`` for any
    other value. The profile document itself is never written.

    Example usage:
        sync = RoleClaimSync(claims_client)
        claim = await sync.handle("u1", {"role": "regular"}, {"role": "staff"})
        # claim == ClaimRole.STAFF
    """

    name = "onUserRoleChange"

    def __init__(self, claims_client):
        """
        Args:
            claims_client: Client exposing ``async set_custom_user_claims(uid, claims)``
        """
        self.claims_client = claims_client

    async def handle(
        self,
        uid: str,
        before: Optional[Dict[str, Any]],
        after: Optional[Dict[str, Any]],
    ) -> Optional[ClaimRole]:
        """
        Args:
            uid: Account ID taken from the document path
            before: Pre-update snapshot, or None
            after: Post-update snapshot, or None

        Returns:
            The claim that was set, or None when nothing was written

        Raises:
            ClaimUpdateError: If the claims client rejects the call
        """
        if before is None or after is None:
            logger.warning(f"Profile update for {uid} is missing a snapshot; ignoring")
            return None

        prev_role = before.get("role")
        new_role = after.get("role")

        if not _role_changed(prev_role, new_role):
            logger.debug(f"Role unchanged for {uid}; no claim update")
            return None

        claim = ClaimRole.from_profile_role(new_role)
        logger.info(f"Role changed for {uid}: {prev_role!r} -> {new_role!r}, setting claim {claim.value}")
        await self.claims_client.set_custom_user_claims(uid, claim.to_claims())
        return claim


def _role_changed(prev_role: Any, new_role: Any) -> bool:
    # Booleans never equal numbers: 1 -> True is a change, as it is in Firestore
    if isinstance(prev_role, bool) or isinstance(new_role, bool):
        return type(prev_role) is not type(new_role) or prev_role != new_role
    return prev_role != new_role
