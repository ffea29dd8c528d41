"""
Unit tests for bearer token handling.

Tests cover:
- Header parsing
- Unverified payload decoding (user_id / sub)
- HS256 verification when a secret is configured
- Expiry of signed and unsigned tokens
"""

from datetime import datetime, timedelta, timezone

import pytest

from cryptotax.core.auth import authenticate, decode_token, extract_bearer_token
from cryptotax.core.exceptions import AuthenticationError

from tests.conftest import TEST_SECRET, make_token


def _epoch(hours: int) -> int:
    return int((datetime.now(timezone.utc) + timedelta(hours=hours)).timestamp())


class TestExtractBearerToken:
    """Tests for Authorization header parsing."""

    @pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer ", "bearer abc"])
    def test_missing_or_malformed_header(self, header):
        """
        GIVEN no header or one without the Bearer prefix
        WHEN I extract the token
        THEN AuthenticationError says the header is required
        """
        with pytest.raises(AuthenticationError) as exc_info:
            extract_bearer_token(header)

        assert exc_info.value.message == "Authorization header required"
        assert exc_info.value.status_code == 401

    def test_token_extracted(self):
        assert extract_bearer_token("Bearer a.b.c") == "a.b.c"


class TestDecodeToken:
    """Tests for payload decoding."""

    def test_user_id_claim(self):
        """
        GIVEN a token with a user_id claim
        WHEN I decode it without a secret
        THEN the user id is returned and the payload is unverified
        """
        payload = decode_token(make_token("alice"))

        assert payload.user_id == "alice"
        assert payload.verified is False

    def test_sub_claim_fallback(self):
        """
        GIVEN a token with only a sub claim
        WHEN I decode it
        THEN sub is used as the user id
        """
        payload = decode_token(make_token("bob", claim="sub"))

        assert payload.user_id == "bob"

    @pytest.mark.parametrize("token", ["not-a-jwt", "a.b", "a.!!!.c", "a.bm90LWpzb24.c"])
    def test_undecodable_token_rejected(self, token):
        """
        GIVEN a malformed token
        WHEN I decode it
        THEN AuthenticationError says the token is invalid
        """
        with pytest.raises(AuthenticationError) as exc_info:
            decode_token(token)

        assert exc_info.value.message == "Invalid authorization token"

    def test_token_without_user_rejected(self):
        """
        GIVEN a token with neither user_id nor sub
        WHEN I decode it
        THEN it is rejected
        """
        with pytest.raises(AuthenticationError):
            decode_token(make_token(None, extra_claims={"email": "x@example.com"}))


class TestSignedTokens:
    """Tests for HS256 verification."""

    def test_valid_signature_accepted(self):
        """
        GIVEN a token signed with the configured secret
        WHEN I decode it with that secret
        THEN it is accepted and marked verified
        """
        payload = decode_token(make_token("alice", secret=TEST_SECRET), secret=TEST_SECRET)

        assert payload.user_id == "alice"
        assert payload.verified is True

    def test_wrong_signature_rejected(self):
        """
        GIVEN a token signed by the identity provider's own key
        WHEN I decode it with a different configured secret
        THEN it is rejected
        """
        with pytest.raises(AuthenticationError) as exc_info:
            decode_token(make_token("alice"), secret=TEST_SECRET)

        assert exc_info.value.message == "Invalid authorization token"

    def test_expired_signed_token_rejected(self):
        """
        GIVEN a correctly signed token whose exp is an hour in the past
        WHEN I decode it with the secret
        THEN it is rejected
        """
        token = make_token("alice", secret=TEST_SECRET, extra_claims={"exp": _epoch(hours=-1)})

        with pytest.raises(AuthenticationError) as exc_info:
            decode_token(token, secret=TEST_SECRET)

        assert exc_info.value.message == "Invalid authorization token"

    def test_unexpired_signed_token_accepted(self):
        token = make_token("alice", secret=TEST_SECRET, extra_claims={"exp": _epoch(hours=1)})

        assert decode_token(token, secret=TEST_SECRET).user_id == "alice"

    def test_expiry_enforced_without_secret(self):
        """
        GIVEN an expired token and no configured secret
        WHEN I decode it
        THEN it is rejected even though the signature is not checked
        """
        token = make_token("alice", extra_claims={"exp": _epoch(hours=-1)})

        with pytest.raises(AuthenticationError):
            decode_token(token)


class TestAuthenticate:
    """Tests for the combined header-to-user flow."""

    def test_returns_user_id_and_warns_when_unverified(self, caplog):
        """
        GIVEN a token and no configured secret
        WHEN I authenticate
        THEN the user id is returned and a warning is logged
        """
        with caplog.at_level("WARNING"):
            user_id = authenticate(f"Bearer {make_token('carol')}")

        assert user_id == "carol"
        assert "unverified" in caplog.text
