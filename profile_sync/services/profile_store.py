"""
Profile Store Service

Writes profile documents to Cloud Firestore, or to a local JSON file when
running without Firebase.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool
from firebase_admin import firestore, firestore_async

from ..errors import ProfileWriteError
from ..models import UserProfile
from .json_store import JsonFileStore


class FirestoreProfileStore:
    """
    Profile documents in a Firestore collection, one document per UID.

    Example usage:
        store = FirestoreProfileStore(app, collection="users")
        await store.upsert_profile(UserProfile(uid="u1", email="a@x.com"))
    """

    def __init__(self, app, collection: str = "users"):
        """
        Args:
            app: Initialized firebase_admin.App
            collection: Collection ID holding profile documents
        """
        self.collection = collection
        self._client = firestore_async.client(app=app)

    async def upsert_profile(self, profile: UserProfile) -> None:
        """
        Create or overwrite ``<collection>/{uid}``.

        ``createdAt`` is the Firestore server timestamp sentinel, resolved by
        the server at commit time.

        Raises:
            ProfileWriteError: If Firestore rejects the write
        """
        document = profile.to_document()
        document["createdAt"] = firestore.SERVER_TIMESTAMP

        doc_ref = self._client.collection(self.collection).document(profile.uid)
        try:
            await doc_ref.set(document)
        except Exception as e:
            raise ProfileWriteError(profile.uid, str(e)) from e


class JsonProfileStore:
    """
    Profile documents kept in a local JSON file.

    ``createdAt`` is the store's own UTC clock in ISO-8601, assigned at write
    time. ``set_role`` stands in for the external actor that edits roles.
    """

    def __init__(self, data_file: str):
        self._store = JsonFileStore(data_file)

    async def upsert_profile(self, profile: UserProfile) -> None:
        document = profile.to_document()
        document["createdAt"] = datetime.now(timezone.utc).isoformat()
        try:
            await run_in_threadpool(self._store.put, profile.uid, document)
        except OSError as e:
            raise ProfileWriteError(profile.uid, str(e)) from e

    def get_profile(self, uid: str) -> Optional[Dict[str, Any]]:
        return self._store.get(uid)

    def list_profiles(self) -> List[Dict[str, Any]]:
        return self._store.values()

    def set_role(self, uid: str, role: str) -> Optional[Dict[str, Any]]:
        """
        Change a stored profile's role.

        Returns:
            The pre-update snapshot, or None if no profile exists for ``uid``
        """
        return self._store.update_field(uid, "role", role)
