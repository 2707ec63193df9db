"""In-memory token model and the signing path."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from jwtcore.core.errors import SigningError, TokenError
from jwtcore.crypto.encoding import (
    SEGMENT_SEPARATOR,
    encode_json_segment,
    encode_segment,
)
from jwtcore.crypto.methods import SigningMethod

DEFAULT_TOKEN_TYPE = "JWT"


class Token(BaseModel):
    """Header, claims, and signature of a compact signed token.

    ``raw_header`` and ``raw_claims`` keep the encoded segments exactly as
    they appeared on the wire; signatures are checked against them rather
    than against a re-serialization.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    header: dict[str, Any] = Field(default_factory=dict)
    claims: dict[str, Any] = Field(default_factory=dict)
    method: SigningMethod | None = None
    signature: str = ""
    raw_header: str = ""
    raw_claims: str = ""
    valid: bool = False

    @classmethod
    def new(
        cls,
        method: SigningMethod,
        claims: Mapping[str, Any] | None = None,
        headers: Mapping[str, Any] | None = None,
    ) -> "Token":
        """Create an unsigned token bound to ``method``."""
        header = {"typ": DEFAULT_TOKEN_TYPE, **(headers or {}), "alg": method.name}
        return cls(header=header, claims=dict(claims or {}), method=method)

    def signing_string(self) -> str:
        """Return ``base64url(header) + "." + base64url(claims)``."""
        if self.method is None:
            raise SigningError("Token has no signing method")
        header = {**self.header, "alg": self.method.name}
        try:
            return SEGMENT_SEPARATOR.join(
                (encode_json_segment(header), encode_json_segment(self.claims))
            )
        except (TypeError, ValueError) as exc:
            raise SigningError(f"Could not serialize token: {exc}") from exc

    def signed_string(self, key: Any) -> str:
        """Sign the token with ``key`` and return the compact serialization."""
        signing_input = self.signing_string()
        assert self.method is not None
        try:
            signature = self.method.sign(signing_input, key)
        except SigningError:
            raise
        except TokenError as exc:
            raise SigningError(f"{self.method.name} signing failed: {exc}") from exc
        return SEGMENT_SEPARATOR.join((signing_input, encode_segment(signature)))
