"""
Custom Claims Service

Publishes the ``role`` custom claim on identity provider accounts.
"""

from typing import Dict, Optional

from fastapi.concurrency import run_in_threadpool
from firebase_admin import auth

from ..errors import ClaimUpdateError
from .json_store import JsonFileStore


class FirebaseClaimsClient:
    """
    Sets custom claims through the Firebase Auth Admin API.

    The Admin SDK call is blocking, so it runs on the thread pool.
    """

    def __init__(self, app):
        self.app = app

    async def set_custom_user_claims(self, uid: str, claims: Dict[str, str]) -> None:
        """
        Replace the account's custom claims with ``claims``.

        Raises:
            ClaimUpdateError: If the Auth API rejects the call
        """
        try:
            await run_in_threadpool(auth.set_custom_user_claims, uid, claims, app=self.app)
        except Exception as e:
            raise ClaimUpdateError(uid, str(e)) from e


class JsonClaimsStore:
    """Custom claims kept in a local JSON file, replaced wholesale per call."""

    def __init__(self, data_file: str):
        self._store = JsonFileStore(data_file)

    async def set_custom_user_claims(self, uid: str, claims: Dict[str, str]) -> None:
        try:
            await run_in_threadpool(self._store.put, uid, dict(claims))
        except OSError as e:
            raise ClaimUpdateError(uid, str(e)) from e

    def get_custom_user_claims(self, uid: str) -> Optional[Dict[str, str]]:
        return self._store.get(uid)
