"""
Exception types raised by the profile sync handlers and adapters.
"""


class ProfileSyncError(Exception):
    """Base class for profile sync failures."""


class DocumentPathError(ProfileSyncError, ValueError):
    """The triggering document path does not match the profile path template."""

    def __init__(self, path: str, template: str):
        self.path = path
        self.template = template
        super().__init__(f"Document path {path!r} does not match {template!r}")


class ProfileWriteError(ProfileSyncError):
    """The document store rejected a profile write."""

    def __init__(self, uid: str, reason: str):
        self.uid = uid
        super().__init__(f"Failed to write profile for {uid}: {reason}")


class ClaimUpdateError(ProfileSyncError):
    """The identity provider rejected a custom claims update."""

    def __init__(self, uid: str, reason: str):
        self.uid = uid
        super().__init__(f"Failed to set custom claims for {uid}: {reason}")
