"""
Profile Sync Services

Event handlers and the document store / identity provider adapters they
write through.
"""

from .claims import FirebaseClaimsClient, JsonClaimsStore
from .document_path import match_document_path, profile_path_template
from .profile_store import FirestoreProfileStore, JsonProfileStore
from .role_claims import RoleClaimSync
from .user_creation import UserCreationSync

__all__ = [
    "FirebaseClaimsClient",
    "JsonClaimsStore",
    "FirestoreProfileStore",
    "JsonProfileStore",
    "RoleClaimSync",
    "UserCreationSync",
    "match_document_path",
    "profile_path_template",
]
