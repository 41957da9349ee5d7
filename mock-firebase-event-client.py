#!/usr/bin/env python3
"""
Mock Firebase Event Client Script

This script plays the event host for local testing: it pushes account-created
and profile-updated events to the Profile Sync Bridge the way the platform
would, without requiring a Firebase project.

Usage:
    python mock-firebase-event-client.py

Configuration:
    Set PROFILE_SYNC_URL and EVENT_BEARER_TOKEN environment variables or rely
    on the defaults below.

Examples:
    # Run the bridge with the local backend
    export EVENT_BEARER_TOKEN="test-token-123" SYNC_BACKEND=local DATA_DIR=/tmp/profile-sync
    uvicorn profile_sync.main:app --port 8080

    # Drive the full lifecycle against it
    export PROFILE_SYNC_URL="http://localhost:8080"
    export EVENT_BEARER_TOKEN="test-token-123"
    python mock-firebase-event-client.py
"""

import os
import sys
import uuid
from typing import Any, Dict, Optional

import requests


class MockFirebaseEventClient:
    """Mock event host that pushes Firebase trigger payloads to the bridge."""

    def __init__(self, base_url: str, bearer_token: str):
        """Initialize the mock event client.

        Args:
            base_url: Profile Sync Bridge base URL (e.g., http://localhost:8080)
            bearer_token: Bearer token for authentication
        """
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {bearer_token}',
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        })

    def _post_event(self, path: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=payload)
            print(f"📤 POST {url}")
            print(f"📊 Status: {response.status_code}")

            if response.status_code == 200:
                result = response.json()
                print(f"✅ {result.get('handler')}: {result.get('status')}")
                if result.get('detail'):
                    print(f"📝 {result['detail']}")
                return result

            print(f"❌ Delivery failed: {response.status_code}")
            print(f"🔍 Response: {response.text}")
            return None

        except requests.RequestException as e:
            print(f"💥 Request failed: {e}")
            return None

    def user_created(self, uid: str, email: Optional[str] = None,
                     display_name: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Push an account-created event.

        Args:
            uid: Firebase Auth UID
            email: Account email, if any
            display_name: Account display name, if any

        Returns:
            Event acknowledgement dict or None if delivery failed
        """
        print(f"\n🔄 Account created: {uid}")
        print(f"📧 Email: {email or 'N/A'}")
        print(f"👤 Display name: {display_name or 'N/A'}")

        return self._post_event("/events/auth/user-created", {
            "uid": uid,
            "email": email,
            "displayName": display_name
        })

    def profile_updated(self, uid: str, before: Optional[Dict[str, Any]],
                        after: Optional[Dict[str, Any]],
                        collection: str = "users") -> Optional[Dict[str, Any]]:
        """Push a profile-updated event for ``<collection>/{uid}``.

        Returns:
            Event acknowledgement dict or None if delivery failed
        """
        before_role = (before or {}).get('role')
        after_role = (after or {}).get('role')
        print(f"\n🔄 Profile updated: {collection}/{uid}")
        print(f"🏷️  Role: {before_role!r} -> {after_role!r}")

        return self._post_event("/events/firestore/profile-updated", {
            "document": f"projects/demo/databases/(default)/documents/{collection}/{uid}",
            "before": before,
            "after": after
        })

    def test_health_endpoint(self) -> bool:
        """Test the health check endpoint.

        Returns:
            True if healthy, False otherwise
        """
        url = f"{self.base_url}/health"

        print(f"\n🏥 Testing health endpoint: {url}")

        try:
            response = self.session.get(url)
            print(f"📊 Status: {response.status_code}")

            if response.status_code == 200:
                result = response.json()
                print(f"✅ Health check passed: {result.get('status', 'unknown')}")
                return True

            print(f"❌ Health check failed: {response.status_code}")
            return False

        except requests.RequestException as e:
            print(f"💥 Health check request failed: {e}")
            return False


def main():
    """Main function to run the mock event scenarios."""

    PROFILE_SYNC_URL = os.environ.get('PROFILE_SYNC_URL', 'http://localhost:8080')
    BEARER_TOKEN = os.environ.get('EVENT_BEARER_TOKEN', 'test-bearer-token-change-me')

    print("🚀 Mock Firebase Event Client")
    print("=" * 50)
    print(f"📡 Profile Sync URL: {PROFILE_SYNC_URL}")
    print(f"🔐 Bearer Token: {BEARER_TOKEN[:8]}{'*' * 8}")

    client = MockFirebaseEventClient(PROFILE_SYNC_URL, BEARER_TOKEN)

    if not client.test_health_endpoint():
        print("\n❌ Health check failed - is the Profile Sync Bridge running?")
        sys.exit(1)

    uid = uuid.uuid4().hex[:28]
    profile = {"uid": uid, "email": "alice@example.com", "displayName": None, "role": "regular"}

    print("\n📋 Test 1: Create Account")
    print("-" * 30)
    if not client.user_created(uid, email="alice@example.com"):
        print("❌ Account creation sync failed, skipping remaining tests")
        return

    print("\n📋 Test 2: Promote to staff")
    print("-" * 30)
    promoted = {**profile, "role": "staff"}
    client.profile_updated(uid, profile, promoted)

    print("\n📋 Test 3: Unrelated field change (no claim update expected)")
    print("-" * 30)
    client.profile_updated(uid, promoted, {**promoted, "displayName": "Alice"})

    print("\n📋 Test 4: Change to an unknown role (collapses to regular)")
    print("-" * 30)
    client.profile_updated(uid, promoted, {**promoted, "role": "admin"})

    print("\n" + "=" * 50)
    print("🎉 Event Scenarios Complete!")
    print("=" * 50)
    print("🔍 Check the bridge logs, or with the local backend inspect")
    print("   $DATA_DIR/profiles.json and $DATA_DIR/claims.json")


if __name__ == "__main__":
    main()
