"""Error types for token signing, verification, and validation."""

from enum import IntFlag


class ValidationErrorFlag(IntFlag):
    """Independently combinable causes of a failed parse."""

    MALFORMED = 1 << 0
    UNVERIFIABLE = 1 << 1
    SIGNATURE_INVALID = 1 << 2
    EXPIRED = 1 << 3
    NOT_VALID_YET = 1 << 4


class TokenError(Exception):
    """Base class for all token errors."""


class SigningError(TokenError):
    """Producing a signature failed."""


class VerificationError(TokenError):
    """A signature did not verify against the supplied key."""


class KeyFormatError(TokenError):
    """Key material could not be loaded or is the wrong kind for the method."""


class NoTokenInRequestError(TokenError):
    """No bearer credential was found on the request."""


class TokenValidationError(TokenError):
    """Aggregated result of a failed parse.

    ``causes`` is the OR of every cause recorded while parsing. ``inner``
    holds the first lower-level exception encountered (resolver failure,
    decode failure, verification failure) for diagnostics.
    """

    def __init__(
        self,
        message: str,
        causes: ValidationErrorFlag,
        inner: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.causes = causes
        self.inner = inner

    def has(self, flag: ValidationErrorFlag) -> bool:
        """Return True if every bit of ``flag`` is set."""
        return (self.causes & flag) == flag

    def __str__(self) -> str:
        if self.inner is not None and not self.message:
            return str(self.inner)
        return self.message

    def __repr__(self) -> str:
        return (
            f"TokenValidationError(message={self.message!r}, "
            f"causes={self.causes!r}, inner={self.inner!r})"
        )
