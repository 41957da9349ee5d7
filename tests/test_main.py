"""
Tests for the Profile Sync Bridge FastAPI application

Runs the app against the local JSON backend and drives it the way the
event host would:
- health check after startup
- bearer token enforcement
- account-created and profile-updated deliveries
- failure results surfaced as non-2xx responses
"""

import pytest
from unittest.mock import AsyncMock

from profile_sync import main
from profile_sync.errors import ClaimUpdateError, ProfileWriteError
from profile_sync.services import JsonClaimsStore, JsonProfileStore

USER_CREATED = "/events/auth/user-created"
PROFILE_UPDATED = "/events/firestore/profile-updated"


@pytest.fixture
def profile_store(local_settings):
    return JsonProfileStore(str(local_settings.profiles_file))


@pytest.fixture
def claims_store(local_settings):
    return JsonClaimsStore(str(local_settings.claims_file))


class TestHealthAndAuth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["services"] == {"user_creation_sync": True, "role_claim_sync": True}

    def test_routes_registered(self, client):
        paths = [route.path for route in main.app.routes]

        assert "/health" in paths
        assert USER_CREATED in paths
        assert PROFILE_UPDATED in paths

    def test_invalid_token(self, client):
        response = client.post(
            USER_CREATED,
            json={"uid": "u1"},
            headers={"Authorization": "Bearer wrong-token"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid bearer token"

    def test_missing_token(self, client):
        response = client.post(USER_CREATED, json={"uid": "u1"})

        assert response.status_code in (401, 403)


class TestUserCreated:

    def test_creates_profile(self, client, auth_headers, profile_store):
        response = client.post(
            USER_CREATED,
            json={"uid": "u1", "email": "a@x.com"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "status": "processed",
            "handler": "createUserDoc",
            "uid": "u1",
            "detail": None,
        }
        document = profile_store.get_profile("u1")
        assert document["uid"] == "u1"
        assert document["email"] == "a@x.com"
        assert document["displayName"] is None
        assert document["role"] == "regular"
        assert document["createdAt"]

    def test_redelivery_keeps_one_document(self, client, auth_headers, profile_store):
        for _ in range(2):
            response = client.post(USER_CREATED, json={"uid": "u1"}, headers=auth_headers)
            assert response.status_code == 200

        assert len(profile_store.list_profiles()) == 1

    def test_extra_user_record_fields_ignored(self, client, auth_headers, profile_store):
        response = client.post(
            USER_CREATED,
            json={"uid": "u1", "displayName": "Alice", "emailVerified": True, "disabled": False},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert profile_store.get_profile("u1")["displayName"] == "Alice"

    def test_missing_uid_rejected(self, client, auth_headers):
        response = client.post(USER_CREATED, json={"email": "a@x.com"}, headers=auth_headers)

        assert response.status_code == 422

    def test_store_failure_returns_500(self, client, auth_headers):
        store = main.user_creation_sync.profile_store
        store.upsert_profile = AsyncMock(side_effect=ProfileWriteError("u1", "unavailable"))

        response = client.post(USER_CREATED, json={"uid": "u1"}, headers=auth_headers)

        assert response.status_code == 500
        assert "unavailable" in response.json()["detail"]


class TestProfileUpdated:

    def _update(self, client, headers, before, after, document="users/u1"):
        return client.post(
            PROFILE_UPDATED,
            json={"document": document, "before": before, "after": after},
            headers=headers,
        )

    def test_promotion_to_staff(self, client, auth_headers, claims_store):
        response = self._update(client, auth_headers, {"role": "regular"}, {"role": "staff"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "processed"
        assert body["handler"] == "onUserRoleChange"
        assert body["uid"] == "u1"
        assert claims_store.get_custom_user_claims("u1") == {"role": "staff"}

    def test_unknown_role_collapses_to_regular(self, client, auth_headers, claims_store):
        response = self._update(client, auth_headers, {"role": "staff"}, {"role": "admin"})

        assert response.status_code == 200
        assert claims_store.get_custom_user_claims("u1") == {"role": "regular"}

    def test_role_absent_in_both(self, client, auth_headers, claims_store):
        response = self._update(client, auth_headers, {"email": "a@x.com"}, {"email": "b@x.com"})

        assert response.status_code == 200
        assert response.json()["status"] == "skipped"
        assert claims_store.get_custom_user_claims("u1") is None

    def test_missing_snapshot_skipped(self, client, auth_headers, claims_store):
        response = self._update(client, auth_headers, {"role": "regular"}, None)

        assert response.status_code == 200
        assert response.json()["status"] == "skipped"
        assert claims_store.get_custom_user_claims("u1") is None

    def test_full_resource_name(self, client, auth_headers, claims_store):
        response = self._update(
            client, auth_headers, {"role": "regular"}, {"role": "staff"},
            document="projects/demo/databases/(default)/documents/users/abc",
        )

        assert response.status_code == 200
        assert claims_store.get_custom_user_claims("abc") == {"role": "staff"}

    def test_path_outside_collection_acknowledged_as_skipped(self, client, auth_headers, claims_store):
        response = self._update(
            client, auth_headers, {"role": "regular"}, {"role": "staff"},
            document="teams/u1",
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "skipped"
        assert body["uid"] is None
        assert "does not match" in body["detail"]
        assert claims_store.get_custom_user_claims("u1") is None

    def test_claims_failure_returns_500(self, client, auth_headers):
        claims_client = main.role_claim_sync.claims_client
        claims_client.set_custom_user_claims = AsyncMock(
            side_effect=ClaimUpdateError("u1", "permission denied")
        )

        response = self._update(client, auth_headers, {"role": "regular"}, {"role": "staff"})

        assert response.status_code == 500
        assert "permission denied" in response.json()["detail"]


def test_account_lifecycle(client, auth_headers, profile_store, claims_store):
    """Create an account, promote it, then demote it through an unknown role"""
    client.post(USER_CREATED, json={"uid": "u7", "email": "g@x.com"}, headers=auth_headers)

    before = profile_store.set_role("u7", "staff")
    after = profile_store.get_profile("u7")
    client.post(
        PROFILE_UPDATED,
        json={"document": "users/u7", "before": before, "after": after},
        headers=auth_headers,
    )
    assert claims_store.get_custom_user_claims("u7") == {"role": "staff"}

    before = profile_store.set_role("u7", "contractor")
    after = profile_store.get_profile("u7")
    client.post(
        PROFILE_UPDATED,
        json={"document": "users/u7", "before": before, "after": after},
        headers=auth_headers,
    )
    assert claims_store.get_custom_user_claims("u7") == {"role": "regular"}
    assert profile_store.get_profile("u7")["role"] == "contractor"
