"""
Firebase Admin App

Process-wide Firebase Admin SDK app, initialized once at startup and shared
by the Firestore and Auth adapters. There is no teardown.
"""

import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials

from ..config import ProfileSyncSettings

logger = logging.getLogger(__name__)

_app: Optional[firebase_admin.App] = None


def initialize_firebase(settings: ProfileSyncSettings) -> firebase_admin.App:
    """
    Initialize the default Firebase Admin app if it isn't initialized yet.

    Uses the service account key in ``FIREBASE_SERVICE_ACCOUNT_FILE`` when
    configured. Otherwise falls back to application default credentials,
    which honour ``GOOGLE_APPLICATION_CREDENTIALS`` with any credential
    file type (service account, authorized user, external account).

    Args:
        settings: Loaded bridge settings

    Returns:
        firebase_admin.App: The shared app instance
    """
    global _app
    if _app is not None:
        return _app

    if settings.firebase_service_account_file:
        cred = credentials.Certificate(str(settings.firebase_service_account_file))
    else:
        cred = credentials.ApplicationDefault()

    options = {}
    if settings.firebase_project_id:
        options["projectId"] = settings.firebase_project_id

    _app = firebase_admin.initialize_app(cred, options)
    logger.info(f"Firebase app initialized (project: {_app.project_id})")
    return _app

