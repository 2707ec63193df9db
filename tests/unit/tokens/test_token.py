"""Tests for the Token model and signing path."""

from datetime import UTC, datetime

import pytest

from jwtcore.core.errors import KeyFormatError, SigningError
from jwtcore.crypto.encoding import decode_json_segment, decode_segment
from jwtcore.crypto.methods import ES256, HS256, RS256
from jwtcore.crypto.types import SigningKeyData
from jwtcore.tokens.token import Token


class TestNewToken:
    """Tests for Token.new."""

    def test_header_shape(self) -> None:
        token = Token.new(HS256)
        assert token.header == {"typ": "JWT", "alg": "HS256"}
        assert token.claims == {}
        assert token.method is HS256
        assert token.signature == ""
        assert not token.valid

    def test_extra_headers(self) -> None:
        token = Token.new(RS256, headers={"kid": "key-1", "alg": "HS256"})
        assert token.header == {"typ": "JWT", "kid": "key-1", "alg": "RS256"}

    def test_claims_are_copied(self) -> None:
        claims = {"foo": "bar"}
        token = Token.new(HS256, claims=claims)
        claims["foo"] = "changed"
        assert token.claims == {"foo": "bar"}


class TestSignedString:
    """Tests for Token.signed_string."""

    def test_wire_format(self, hmac_secret: bytes) -> None:
        token = Token.new(HS256)
        token.claims = {"foo": "bar"}
        signed = token.signed_string(hmac_secret)
        segments = signed.split(".")
        assert len(segments) == 3
        assert all(segments)
        assert "=" not in signed
        assert decode_json_segment(segments[0]) == {"typ": "JWT", "alg": "HS256"}
        assert decode_json_segment(segments[1]) == {"foo": "bar"}
        assert len(decode_segment(segments[2])) == 32

    def test_signing_string_is_prefix(self, hmac_secret: bytes) -> None:
        token = Token.new(HS256, claims={"n": 1})
        assert token.signed_string(hmac_secret).startswith(
            token.signing_string() + "."
        )

    def test_deterministic_for_hmac(self, hmac_secret: bytes) -> None:
        token = Token.new(HS256, claims={"n": 1})
        assert token.signed_string(hmac_secret) == token.signed_string(hmac_secret)

    def test_alg_follows_method(self, hmac_secret: bytes) -> None:
        token = Token(header={"alg": "RS256", "typ": "JWT"}, method=HS256)
        header = decode_json_segment(token.signed_string(hmac_secret).split(".")[0])
        assert header["alg"] == "HS256"

    def test_datetime_claims(self, hmac_secret: bytes) -> None:
        exp = datetime(2030, 1, 1, tzinfo=UTC)
        signed = Token.new(HS256, claims={"exp": exp}).signed_string(hmac_secret)
        assert decode_json_segment(signed.split(".")[1]) == {
            "exp": int(exp.timestamp())
        }

    def test_ecdsa(self, ec_keys: dict[str, SigningKeyData]) -> None:
        signed = Token.new(ES256).signed_string(ec_keys["ES256"].private_key_pem)
        assert len(decode_segment(signed.split(".")[2])) == 64


class TestSigningFailures:
    """Tests for signing errors."""

    def test_no_method(self) -> None:
        with pytest.raises(SigningError):
            Token().signed_string(b"secret")

    def test_bad_key_wrapped(self) -> None:
        with pytest.raises(SigningError) as excinfo:
            Token.new(RS256).signed_string("not a pem")
        assert isinstance(excinfo.value.__cause__, KeyFormatError)

    def test_public_key_cannot_sign(self, rsa_keys: SigningKeyData) -> None:
        with pytest.raises(SigningError):
            Token.new(RS256).signed_string(rsa_keys.public_key_pem)

    def test_unserializable_claims(self, hmac_secret: bytes) -> None:
        with pytest.raises(SigningError):
            Token.new(HS256, claims={"x": {1, 2}}).signed_string(hmac_secret)
