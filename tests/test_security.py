"""
Tests for JWT handling and how tokens become an AuthContext.

Tests:
- Token encode/decode
- Expired and tampered tokens
- Invalid tokens leave the caller anonymous on reads and rejected on writes
"""

from datetime import timedelta

import pytest
from jose import JWTError

from jobboard.core.security import create_access_token, decode_token


class TestTokens:

    def test_round_trip(self):
        token = create_access_token({"sub": "admin", "is_admin": True})
        payload = decode_token(token)

        assert payload["sub"] == "admin"
        assert payload["is_admin"] is True
        assert "exp" in payload

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "u1"}, expires_delta=timedelta(minutes=-5))
        with pytest.raises(JWTError):
            decode_token(token)

    def test_tampered_token_rejected(self):
        token = create_access_token({"sub": "u1"})
        with pytest.raises(JWTError):
            decode_token(token[:-4] + "abcd")


class TestTokensOnRoutes:

    def test_reads_ignore_invalid_token(self, client, seeded):
        response = client.get("/api/v1/jobs/c1", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 200

    def test_writes_reject_invalid_token(self, client, seeded):
        response = client.delete("/api/v1/jobs/c1", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_writes_reject_expired_admin_token(self, client, seeded):
        token = create_access_token({"sub": "admin", "is_admin": True}, expires_delta=timedelta(minutes=-5))
        response = client.delete("/api/v1/jobs/c1", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_admin_claim_must_be_true(self, client, seeded):
        token = create_access_token({"sub": "sneaky", "is_admin": "yes"})
        response = client.delete("/api/v1/jobs/c1", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"
