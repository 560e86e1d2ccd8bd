"""Unit tests for auth/tokens.py -- bearer token issuance and verification.

Covers:
- subject claim carries the phone number; HS256 header
- fixed 24h lifetime (exp - iat)
- decode rejects wrong secret, tampering, expiry, missing subject, garbage
- empty secret is a ConfigurationError at construction
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from auth.models import User
from auth.tokens import ALGORITHM, TOKEN_LIFETIME, TokenIssuer
from core.errors import ConfigurationError

_USER = User(phone_number="555-0100", first_name="Ada", last_name="Lovelace", email="ada@example.com")


class TestIssue:
    def test_subject_is_phone_number(self, token_issuer: TokenIssuer, token_secret: str) -> None:
        token = token_issuer.issue(_USER)
        claims = jwt.decode(token, token_secret, algorithms=["HS256"])
        assert claims["sub"] == "555-0100"

    def test_header_algorithm_is_hs256(self, token_issuer: TokenIssuer) -> None:
        token = token_issuer.issue(_USER)
        assert jwt.get_unverified_header(token)["alg"] == ALGORITHM == "HS256"

    def test_lifetime_is_one_day(self, token_issuer: TokenIssuer) -> None:
        before = int(datetime.now(timezone.utc).timestamp())
        claims = token_issuer.decode(token_issuer.issue(_USER))
        assert claims is not None
        assert claims["exp"] - claims["iat"] == 24 * 3600
        assert claims["iat"] >= before - 1
        assert TOKEN_LIFETIME == timedelta(days=1)

    def test_no_password_material_in_claims(self, token_issuer: TokenIssuer) -> None:
        claims = jwt.get_unverified_claims(token_issuer.issue(_USER))
        assert set(claims) == {"sub", "iat", "exp"}


class TestDecode:
    def test_round_trip(self, token_issuer: TokenIssuer) -> None:
        claims = token_issuer.decode(token_issuer.issue(_USER))
        assert claims is not None
        assert claims["sub"] == "555-0100"

    def test_wrong_secret_rejected(self, token_issuer: TokenIssuer) -> None:
        other = TokenIssuer("another-secret-that-is-long-enough-0123456789")
        assert other.decode(token_issuer.issue(_USER)) is None

    def test_tampered_signature_rejected(self, token_issuer: TokenIssuer) -> None:
        token = token_issuer.issue(_USER)
        header, payload, signature = token.split(".")
        flipped = signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")
        assert token_issuer.decode(f"{header}.{payload}.{flipped}") is None

    def test_expired_token_rejected(self, token_secret: str) -> None:
        issuer = TokenIssuer(token_secret, lifetime=timedelta(seconds=-60))
        assert issuer.decode(issuer.issue(_USER)) is None

    def test_missing_subject_rejected(self, token_issuer: TokenIssuer, token_secret: str) -> None:
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"exp": exp}, token_secret, algorithm="HS256")
        assert token_issuer.decode(token) is None

    def test_other_algorithm_rejected(self, token_issuer: TokenIssuer, token_secret: str) -> None:
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({"sub": "555-0100", "exp": exp}, token_secret, algorithm="HS512")
        assert token_issuer.decode(token) is None

    def test_garbage_rejected(self, token_issuer: TokenIssuer) -> None:
        assert token_issuer.decode("not-a-token") is None
        assert token_issuer.decode("") is None


class TestConstruction:
    @pytest.mark.parametrize("secret", ["", None])
    def test_missing_secret_is_configuration_error(self, secret) -> None:
        with pytest.raises(ConfigurationError):
            TokenIssuer(secret)
