"""Shared test fixtures for jwtcore."""

from collections.abc import Callable
from typing import Any

import pytest

from jwtcore.crypto.keys import (
    generate_ec_keypair,
    generate_hmac_secret,
    generate_rsa_keypair,
)
from jwtcore.crypto.methods import RS256
from jwtcore.crypto.types import SigningKeyData
from jwtcore.tokens.token import Token


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep parser settings at their defaults unless a test sets them."""
    for name in ("JWT_VALID_METHODS", "JWT_USE_JSON_NUMBER", "JWT_LEEWAY_SECONDS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def rsa_keys() -> SigningKeyData:
    """One RSA keypair shared across the session; generation is slow."""
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def other_rsa_keys() -> SigningKeyData:
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def ec_keys() -> dict[str, SigningKeyData]:
    """EC keypairs indexed by algorithm name."""
    pairs = [
        generate_ec_keypair(curve)
        for curve in ("secp256r1", "secp384r1", "secp521r1")
    ]
    return {kp.algorithm: kp for kp in pairs}


@pytest.fixture
def hmac_secret() -> bytes:
    return generate_hmac_secret()


@pytest.fixture
def make_rs256(rsa_keys: SigningKeyData) -> Callable[[dict[str, Any]], str]:
    """Build an RS256 token string for the given claims."""

    def _make(claims: dict[str, Any]) -> str:
        return Token.new(RS256, claims=claims).signed_string(rsa_keys.private_key_pem)

    return _make
