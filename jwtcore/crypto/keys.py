"""Signing key generation and PEM loading."""

import secrets

import uuid_utils
from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.types import (
    PrivateKeyTypes,
    PublicKeyTypes,
)

from jwtcore.core.errors import KeyFormatError
from jwtcore.crypto.types import SigningKeyData

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537
HMAC_SECRET_BYTES = 32

EC_CURVES: dict[str, tuple[type[ec.EllipticCurve], str]] = {
    "secp256r1": (ec.SECP256R1, "ES256"),
    "secp384r1": (ec.SECP384R1, "ES384"),
    "secp521r1": (ec.SECP521R1, "ES512"),
}


def _to_pem_pair(
    private_key: rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey,
) -> tuple[str, str]:
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return private_pem, public_pem


def generate_rsa_keypair(algorithm: str = "RS256") -> SigningKeyData:
    """Generate a new RSA-2048 keypair for RS*/PS* signing."""
    private_key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=RSA_KEY_SIZE,
    )
    private_pem, public_pem = _to_pem_pair(private_key)
    return SigningKeyData(
        kid=str(uuid_utils.uuid7()),
        algorithm=algorithm,
        private_key_pem=private_pem,
        public_key_pem=public_pem,
    )


def generate_ec_keypair(curve_name: str = "secp256r1") -> SigningKeyData:
    """Generate a new EC keypair on one of the NIST curves used by ES*."""
    try:
        curve_cls, algorithm = EC_CURVES[curve_name]
    except KeyError:
        raise ValueError(f"Unsupported curve: {curve_name}") from None
    private_key = ec.generate_private_key(curve_cls())
    private_pem, public_pem = _to_pem_pair(private_key)
    return SigningKeyData(
        kid=str(uuid_utils.uuid7()),
        algorithm=algorithm,
        private_key_pem=private_pem,
        public_key_pem=public_pem,
    )


def generate_hmac_secret(nbytes: int = HMAC_SECRET_BYTES) -> bytes:
    """Generate a random shared secret for HS* signing."""
    return secrets.token_bytes(nbytes)


def _pem_bytes(pem: str | bytes) -> bytes:
    if isinstance(pem, str):
        return pem.encode()
    if isinstance(pem, bytes):
        return pem
    raise KeyFormatError(f"Key must be PEM encoded, got {type(pem).__name__}")


def load_private_key(pem: str | bytes) -> PrivateKeyTypes:
    """Load an unencrypted PEM private key."""
    data = _pem_bytes(pem)
    try:
        return serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"Invalid PEM private key: {exc}") from exc


def load_public_key(pem: str | bytes) -> PublicKeyTypes:
    """Load a PEM public key or the public key of a PEM certificate."""
    data = _pem_bytes(pem)
    if b"-----BEGIN CERTIFICATE-----" in data:
        try:
            return x509.load_pem_x509_certificate(data).public_key()
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise KeyFormatError(f"Invalid PEM certificate: {exc}") from exc
    try:
        return serialization.load_pem_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"Invalid PEM public key: {exc}") from exc


def parse_rsa_private_key_from_pem(pem: str | bytes) -> rsa.RSAPrivateKey:
    """Load a PEM private key that must be RSA."""
    key = load_private_key(pem)
    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyFormatError("Key is not an RSA private key")
    return key


def parse_rsa_public_key_from_pem(pem: str | bytes) -> rsa.RSAPublicKey:
    """Load a PEM public key or certificate that must be RSA."""
    key = load_public_key(pem)
    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyFormatError("Key is not an RSA public key")
    return key


def parse_ec_private_key_from_pem(pem: str | bytes) -> ec.EllipticCurvePrivateKey:
    """Load a PEM private key that must be EC."""
    key = load_private_key(pem)
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise KeyFormatError("Key is not an EC private key")
    return key


def parse_ec_public_key_from_pem(pem: str | bytes) -> ec.EllipticCurvePublicKey:
    """Load a PEM public key or certificate that must be EC."""
    key = load_public_key(pem)
    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise KeyFormatError("Key is not an EC public key")
    return key
