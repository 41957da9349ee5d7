"""
Profile Sync Bridge - Main FastAPI Application

Receives Firebase events pushed by the event host and keeps two things in
step with the identity provider:

- a profile document in Firestore for every account (createUserDoc)
- the account's ``role`` custom claim whenever the profile's role changes
  (onUserRoleChange)

Endpoints:
- GET /health - Health check
- POST /events/auth/user-created - Account created
- POST /events/firestore/profile-updated - Profile document updated

A 2xx response tells the host the event was handled; any failure returns a
5xx so the host's redelivery policy applies.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends, status
from fastapi.responses import JSONResponse

from .config import get_settings
from .errors import DocumentPathError, ProfileSyncError
from .handlers import verify_bearer_token
from .models import AuthUserRecord, ProfileChangeEvent, EventAck, EventError
from .services import (
    FirebaseClaimsClient,
    FirestoreProfileStore,
    JsonClaimsStore,
    JsonProfileStore,
    RoleClaimSync,
    UserCreationSync,
    match_document_path,
    profile_path_template,
)
from .services.firebase_app import initialize_firebase

__version__ = "1.0.0"

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# FastAPI app initialization
app = FastAPI(
    title="Profile Sync Bridge",
    description="Syncs Firebase Auth accounts to Firestore profiles and profile roles to custom claims",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Global service instances (initialized on startup)
user_creation_sync: Optional[UserCreationSync] = None
role_claim_sync: Optional[RoleClaimSync] = None
profile_template: Optional[str] = None


@app.on_event("startup")
async def startup_event():
    """
    Initialize the platform clients and handlers once, before serving events.
    """
    global user_creation_sync, role_claim_sync, profile_template

    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)

    logger.info(f"Starting Profile Sync Bridge ({settings.sync_backend} backend)...")

    try:
        if settings.sync_backend == "local":
            profile_store = JsonProfileStore(data_file=str(settings.profiles_file))
            claims_client = JsonClaimsStore(data_file=str(settings.claims_file))
        else:
            firebase_app = initialize_firebase(settings)
            profile_store = FirestoreProfileStore(
                firebase_app, collection=settings.profiles_collection
            )
            claims_client = FirebaseClaimsClient(firebase_app)

        user_creation_sync = UserCreationSync(profile_store)
        role_claim_sync = RoleClaimSync(claims_client)
        profile_template = profile_path_template(settings.profiles_collection)

        logger.info("Profile Sync Bridge handlers initialized successfully")

    except Exception as e:
        logger.error(f"Failed to initialize services: {e}")
        raise


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Health status and handler availability
    """
    services_status = {
        "user_creation_sync": user_creation_sync is not None,
        "role_claim_sync": role_claim_sync is not None,
    }

    all_services_ready = all(services_status.values())

    health_response = {
        "status": "healthy" if all_services_ready else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": services_status,
        "version": __version__
    }

    if not all_services_ready:
        logger.warning(f"Health check failed - services status: {services_status}")

    return JSONResponse(content=health_response, status_code=200 if all_services_ready else 503)


def _error_response(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(
        content=EventError(status=status_code, detail=detail).model_dump(),
        status_code=status_code,
    )


@app.post("/events/auth/user-created", dependencies=[Depends(verify_bearer_token)])
async def user_created(user: AuthUserRecord):
    """
    Account created: write the initial profile document.

    Args:
        user: Created account's UID, email and display name

    Returns:
        EventAck: Completion signal
    """
    try:
        await user_creation_sync.handle(user)
    except ProfileSyncError as e:
        logger.error(f"{UserCreationSync.name} failed for {user.uid}: {e}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    ack = EventAck(status="processed", handler=UserCreationSync.name, uid=user.uid)
    return JSONResponse(content=ack.model_dump(), status_code=status.HTTP_200_OK)


@app.post("/events/firestore/profile-updated", dependencies=[Depends(verify_bearer_token)])
async def profile_updated(event: ProfileChangeEvent):
    """
    Profile document updated: re-derive the role claim if the role changed.

    Args:
        event: Triggering document path with pre- and post-update snapshots

    Returns:
        EventAck: ``processed`` when a claim was set, ``skipped`` otherwise
    """
    try:
        uid = match_document_path(profile_template, event.document)["uid"]
    except DocumentPathError as e:
        # A path outside the profile collection never matches on redelivery either
        logger.warning(f"Ignoring profile update event: {e}")
        ack = EventAck(status="skipped", handler=RoleClaimSync.name, uid=None, detail=str(e))
        return JSONResponse(content=ack.model_dump(), status_code=status.HTTP_200_OK)

    try:
        claim = await role_claim_sync.handle(uid, event.before, event.after)
    except ProfileSyncError as e:
        logger.error(f"{RoleClaimSync.name} failed for {uid}: {e}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    if claim is None:
        ack = EventAck(status="skipped", handler=RoleClaimSync.name, uid=uid)
    else:
        ack = EventAck(
            status="processed",
            handler=RoleClaimSync.name,
            uid=uid,
            detail=f"role claim set to {claim.value}",
        )
    return JSONResponse(content=ack.model_dump(), status_code=status.HTTP_200_OK)


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Convert FastAPI HTTPExceptions to the event error format."""
    return JSONResponse(
        content=EventError(status=exc.status_code, detail=exc.detail).model_dump(),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Convert unhandled exceptions to the event error format."""
    logger.error(f"Unhandled exception: {exc}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
