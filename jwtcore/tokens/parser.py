"""Token parsing, signature verification, and time-based validation."""

import time
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from loguru import logger

from jwtcore.core.errors import (
    KeyFormatError,
    TokenValidationError,
    ValidationErrorFlag,
    VerificationError,
)
from jwtcore.core.settings import ParserSettings
from jwtcore.crypto.encoding import (
    SEGMENT_SEPARATOR,
    decode_json_segment,
    decode_segment,
)
from jwtcore.crypto.methods import SigningMethod
from jwtcore.crypto.registry import DEFAULT_REGISTRY, MethodRegistry
from jwtcore.tokens.token import Token
from jwtcore.tokens.types import KeyFunc, ParseResult

SEGMENT_COUNT = 3


class _Findings:
    """Accumulates validation causes recorded during a single parse."""

    def __init__(self) -> None:
        self.causes = ValidationErrorFlag(0)
        self.messages: list[str] = []
        self.inner: BaseException | None = None

    def record(
        self,
        flag: ValidationErrorFlag,
        message: str,
        exc: BaseException | None = None,
    ) -> None:
        self.causes |= flag
        self.messages.append(message)
        if self.inner is None:
            self.inner = exc
        logger.debug(f"Token check failed ({flag.name}): {message}")

    def to_error(self) -> TokenValidationError | None:
        if not self.causes:
            return None
        return TokenValidationError("; ".join(self.messages), self.causes, self.inner)


def _is_numeric(value: Any) -> bool:
    return isinstance(value, int | float | Decimal) and not isinstance(value, bool)


def _split(token_string: str) -> list[str]:
    parts = token_string.split(SEGMENT_SEPARATOR)
    if len(parts) != SEGMENT_COUNT or not all(parts):
        raise TokenValidationError(
            "token contains an invalid number of segments",
            ValidationErrorFlag.MALFORMED,
        )
    return parts


class Parser:
    """Decodes compact tokens and validates signature and time claims.

    A Parser holds only read-only configuration and is safe to share
    between threads.
    """

    def __init__(
        self,
        settings: ParserSettings | None = None,
        registry: MethodRegistry = DEFAULT_REGISTRY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._settings = settings or ParserSettings()
        self._registry = registry
        self._clock = clock
        self._valid_methods = frozenset(self._settings.get_valid_method_list())

    def parse(self, token_string: str, key_func: KeyFunc | None) -> ParseResult:
        """Parse ``token_string`` and validate it using the key from ``key_func``.

        Every failure except a structural one is accumulated into a single
        ``TokenValidationError``; the decoded token is always returned so
        its claims can be inspected.
        """
        try:
            raw_header, raw_claims, signature = _split(token_string)
        except TokenValidationError as exc:
            logger.debug(f"Token rejected: {exc.message}")
            return ParseResult(token=Token(), error=exc)

        token = Token(raw_header=raw_header, raw_claims=raw_claims, signature=signature)
        try:
            token.header = decode_json_segment(raw_header)
        except ValueError as exc:
            return self._malformed(token, "could not decode token header", exc)
        try:
            token.claims = decode_json_segment(
                raw_claims, use_json_number=self._settings.use_json_number
            )
        except ValueError as exc:
            return self._malformed(token, "could not decode token claims", exc)

        findings = _Findings()
        alg = token.header.get("alg")
        method = self._registry.lookup(alg) if isinstance(alg, str) else None
        token.method = method
        verifiable = method is not None
        if method is None:
            findings.record(
                ValidationErrorFlag.SIGNATURE_INVALID,
                f"signing method {alg!r} is unavailable",
            )
        elif self._valid_methods and method.name not in self._valid_methods:
            verifiable = False
            findings.record(
                ValidationErrorFlag.SIGNATURE_INVALID,
                f"signing method {method.name} is invalid",
            )

        key: Any = None
        if key_func is None:
            verifiable = False
            findings.record(
                ValidationErrorFlag.UNVERIFIABLE, "no key function was provided"
            )
        else:
            try:
                key = key_func(token)
            except Exception as exc:
                logger.warning(f"Key resolution failed: {exc}")
                verifiable = False
                findings.record(
                    ValidationErrorFlag.UNVERIFIABLE, "error resolving key", exc
                )

        if verifiable:
            assert method is not None
            self._verify_signature(token, method, key, findings)

        self._check_times(token.claims, findings)

        error = findings.to_error()
        token.valid = error is None
        return ParseResult(token=token, error=error)

    def _verify_signature(
        self, token: Token, method: SigningMethod, key: Any, findings: _Findings
    ) -> None:
        try:
            signature = decode_segment(token.signature)
        except ValueError as exc:
            findings.record(
                ValidationErrorFlag.SIGNATURE_INVALID,
                "could not decode signature",
                exc,
            )
            return
        signing_input = SEGMENT_SEPARATOR.join((token.raw_header, token.raw_claims))
        try:
            method.verify(signing_input, signature, key)
        except (VerificationError, KeyFormatError) as exc:
            findings.record(
                ValidationErrorFlag.SIGNATURE_INVALID, "signature is invalid", exc
            )

    def _check_times(self, claims: dict[str, Any], findings: _Findings) -> None:
        now = self._clock()
        leeway = self._settings.leeway_seconds
        exp = claims.get("exp")
        if _is_numeric(exp) and exp < now - leeway:
            findings.record(ValidationErrorFlag.EXPIRED, "token is expired")
        nbf = claims.get("nbf")
        if _is_numeric(nbf) and nbf > now + leeway:
            findings.record(ValidationErrorFlag.NOT_VALID_YET, "token is not valid yet")

    @staticmethod
    def _malformed(token: Token, message: str, exc: Exception) -> ParseResult:
        logger.debug(f"Token rejected: {message}: {exc}")
        error = TokenValidationError(message, ValidationErrorFlag.MALFORMED, exc)
        return ParseResult(token=token, error=error)


def parse(token_string: str, key_func: KeyFunc | None) -> ParseResult:
    """Parse with a default-configured Parser."""
    return Parser().parse(token_string, key_func)


def get_unverified_header(token_string: str) -> dict[str, Any]:
    """Decode the header without checking the signature."""
    raw_header, _, _ = _split(token_string)
    try:
        return decode_json_segment(raw_header)
    except ValueError as exc:
        raise TokenValidationError(
            "could not decode token header", ValidationErrorFlag.MALFORMED, exc
        ) from exc


def get_unverified_claims(
    token_string: str, *, use_json_number: bool = False
) -> dict[str, Any]:
    """Decode the claims without checking the signature or time claims."""
    _, raw_claims, _ = _split(token_string)
    try:
        return decode_json_segment(raw_claims, use_json_number=use_json_number)
    except ValueError as exc:
        raise TokenValidationError(
            "could not decode token claims", ValidationErrorFlag.MALFORMED, exc
        ) from exc
