"""
Profile Sync Bridge

Keeps Firestore user profiles and Firebase Auth role claims in step with
account and profile events.
"""
