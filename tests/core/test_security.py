"""Tests for bearer token helpers and app wiring."""

from __future__ import annotations

import jwt

from pinmap.core.config import settings
from pinmap.core.security import create_access_token, decode_access_token


def test_token_round_trip():
    token = create_access_token("user-123")

    assert decode_access_token(token)["sub"] == "user-123"


def test_expired_token_rejected():
    token = create_access_token("user-123", expires_minutes=-1)

    assert decode_access_token(token) is None


def test_foreign_signature_rejected():
    token = jwt.encode({"sub": "user-123"}, "some-other-secret", algorithm=settings.JWT_ALGORITHM)

    assert decode_access_token(token) is None


def test_garbage_rejected():
    assert decode_access_token("not.a.token") is None


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
