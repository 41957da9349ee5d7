"""
User Creation Sync

Writes the initial profile document for every newly created account.
"""

import logging

from ..models import AuthUserRecord, UserProfile, DEFAULT_PROFILE_ROLE

logger = logging.getLogger(__name__)


class UserCreationSync:
    """
    Handler for the account-created trigger.

    Upserts ``<collection>/{uid}`` with the account's email and display name,
    role ``"regular"`` and a server-assigned ``createdAt``. A second delivery
    for the same account overwrites the document. Store failures propagate
    to the caller unchanged; there is no retry here.
    """

    name = "createUserDoc"

    def __init__(self, profile_store):
        """
        Args:
            profile_store: Store exposing ``async upsert_profile(profile)``
        """
        self.profile_store = profile_store

    async def handle(self, user: AuthUserRecord) -> UserProfile:
        profile = UserProfile(
            uid=user.uid,
            email=user.email,
            displayName=user.displayName,
            role=DEFAULT_PROFILE_ROLE,
        )

        logger.info(f"Creating profile document for {user.uid}")
        await self.profile_store.upsert_profile(profile)
        return profile
