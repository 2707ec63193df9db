"""Signing methods for HMAC, RSA, RSA-PSS, and ECDSA.

Every method exposes the same three members: ``name`` (the canonical
``alg`` value), ``sign(signing_input, key) -> bytes`` and
``verify(signing_input, signature, key) -> None``. ``verify`` raises
``VerificationError`` when the signature does not match and
``KeyFormatError`` when the key cannot be used; ``sign`` raises
``SigningError`` or ``KeyFormatError``.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from jwt.utils import der_to_raw_signature, raw_to_der_signature

from jwtcore.core.errors import KeyFormatError, SigningError, VerificationError
from jwtcore.crypto.keys import (
    parse_ec_private_key_from_pem,
    parse_ec_public_key_from_pem,
    parse_rsa_private_key_from_pem,
    parse_rsa_public_key_from_pem,
)


@runtime_checkable
class SigningMethod(Protocol):
    """Contract shared by every signing algorithm."""

    name: str

    def sign(self, signing_input: str, key: Any) -> bytes: ...

    def verify(self, signing_input: str, signature: bytes, key: Any) -> None: ...


_ASYMMETRIC_KEY_PREFIXES = (
    b"-----BEGIN ",
    b"ssh-rsa ",
    b"ssh-ed25519 ",
    b"ecdsa-sha2-",
)


def _hmac_secret(key: Any) -> bytes:
    if isinstance(key, str):
        key = key.encode()
    if not isinstance(key, bytes):
        raise KeyFormatError(f"HMAC key must be bytes or str, got {type(key).__name__}")
    if not key:
        raise KeyFormatError("HMAC key must not be empty")
    if key.lstrip().startswith(_ASYMMETRIC_KEY_PREFIXES):
        raise KeyFormatError("Asymmetric key material cannot be used as an HMAC key")
    return key


@dataclass(frozen=True)
class HMACMethod:
    """HMAC with a shared secret (HS256, HS384, HS512)."""

    name: str
    hash_alg: type[hashes.HashAlgorithm]

    def _mac(self, signing_input: str, key: Any) -> hmac.HMAC:
        mac = hmac.HMAC(_hmac_secret(key), self.hash_alg())
        mac.update(signing_input.encode())
        return mac

    def sign(self, signing_input: str, key: Any) -> bytes:
        return self._mac(signing_input, key).finalize()

    def verify(self, signing_input: str, signature: bytes, key: Any) -> None:
        mac = self._mac(signing_input, key)
        try:
            # HMAC.verify compares in constant time
            mac.verify(signature)
        except InvalidSignature as exc:
            raise VerificationError(f"{self.name} signature mismatch") from exc


def _rsa_private(key: Any) -> rsa.RSAPrivateKey:
    if isinstance(key, rsa.RSAPrivateKey):
        return key
    if isinstance(key, str | bytes):
        return parse_rsa_private_key_from_pem(key)
    raise KeyFormatError(f"RSA signing key required, got {type(key).__name__}")


def _rsa_public(key: Any) -> rsa.RSAPublicKey:
    if isinstance(key, rsa.RSAPublicKey):
        return key
    if isinstance(key, rsa.RSAPrivateKey):
        return key.public_key()
    if isinstance(key, str | bytes):
        return parse_rsa_public_key_from_pem(key)
    raise KeyFormatError(f"RSA verification key required, got {type(key).__name__}")


@dataclass(frozen=True)
class RSAMethod:
    """RSASSA-PKCS1-v1_5 (RS*) or RSASSA-PSS (PS*)."""

    name: str
    hash_alg: type[hashes.HashAlgorithm]
    pss: bool = False

    def _padding(self) -> padding.AsymmetricPadding:
        if self.pss:
            return padding.PSS(
                mgf=padding.MGF1(self.hash_alg()),
                salt_length=self.hash_alg().digest_size,
            )
        return padding.PKCS1v15()

    def sign(self, signing_input: str, key: Any) -> bytes:
        private_key = _rsa_private(key)
        try:
            return private_key.sign(
                signing_input.encode(), self._padding(), self.hash_alg()
            )
        except ValueError as exc:
            raise SigningError(f"{self.name} signing failed: {exc}") from exc

    def verify(self, signing_input: str, signature: bytes, key: Any) -> None:
        public_key = _rsa_public(key)
        try:
            public_key.verify(
                signature, signing_input.encode(), self._padding(), self.hash_alg()
            )
        except InvalidSignature as exc:
            raise VerificationError(f"{self.name} signature mismatch") from exc


@dataclass(frozen=True)
class ECDSAMethod:
    """ECDSA over a fixed NIST curve (ES256, ES384, ES512).

    Signatures travel as the fixed-width ``r || s`` concatenation rather
    than DER.
    """

    name: str
    hash_alg: type[hashes.HashAlgorithm]
    curve: type[ec.EllipticCurve]

    def _check_curve(self, curve: ec.EllipticCurve) -> None:
        if not isinstance(curve, self.curve):
            raise KeyFormatError(
                f"{self.name} requires a {self.curve.name} key, got {curve.name}"
            )

    def _private(self, key: Any) -> ec.EllipticCurvePrivateKey:
        if isinstance(key, str | bytes):
            key = parse_ec_private_key_from_pem(key)
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise KeyFormatError(f"EC signing key required, got {type(key).__name__}")
        self._check_curve(key.curve)
        return key

    def _public(self, key: Any) -> ec.EllipticCurvePublicKey:
        if isinstance(key, ec.EllipticCurvePrivateKey):
            key = key.public_key()
        elif isinstance(key, str | bytes):
            key = parse_ec_public_key_from_pem(key)
        if not isinstance(key, ec.EllipticCurvePublicKey):
            raise KeyFormatError(
                f"EC verification key required, got {type(key).__name__}"
            )
        self._check_curve(key.curve)
        return key

    def sign(self, signing_input: str, key: Any) -> bytes:
        private_key = self._private(key)
        der = private_key.sign(signing_input.encode(), ec.ECDSA(self.hash_alg()))
        return der_to_raw_signature(der, private_key.curve)

    def verify(self, signing_input: str, signature: bytes, key: Any) -> None:
        public_key = self._public(key)
        try:
            der = raw_to_der_signature(signature, public_key.curve)
        except ValueError as exc:
            raise VerificationError(f"{self.name} signature has wrong size") from exc
        try:
            public_key.verify(der, signing_input.encode(), ec.ECDSA(self.hash_alg()))
        except InvalidSignature as exc:
            raise VerificationError(f"{self.name} signature mismatch") from exc


HS256 = HMACMethod("HS256", hashes.SHA256)
HS384 = HMACMethod("HS384", hashes.SHA384)
HS512 = HMACMethod("HS512", hashes.SHA512)
RS256 = RSAMethod("RS256", hashes.SHA256)
RS384 = RSAMethod("RS384", hashes.SHA384)
RS512 = RSAMethod("RS512", hashes.SHA512)
PS256 = RSAMethod("PS256", hashes.SHA256, pss=True)
PS384 = RSAMethod("PS384", hashes.SHA384, pss=True)
PS512 = RSAMethod("PS512", hashes.SHA512, pss=True)
ES256 = ECDSAMethod("ES256", hashes.SHA256, ec.SECP256R1)
ES384 = ECDSAMethod("ES384", hashes.SHA384, ec.SECP384R1)
ES512 = ECDSAMethod("ES512", hashes.SHA512, ec.SECP521R1)

ALL_METHODS: tuple[SigningMethod, ...] = (
    HS256,
    HS384,
    HS512,
    RS256,
    RS384,
    RS512,
    PS256,
    PS384,
    PS512,
    ES256,
    ES384,
    ES512,
)
