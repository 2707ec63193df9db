"""Type definitions for token parsing."""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from jwtcore.core.errors import TokenValidationError
from jwtcore.tokens.token import Token

KeyFunc = Callable[[Token], Any]
"""Resolves the verification key for a decoded token; raises on failure."""


class ParseResult(BaseModel):
    """A parsed token together with the aggregated validation error, if any."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    token: Token
    error: TokenValidationError | None = None

    @property
    def valid(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> Token:
        """Return the token, or raise the validation error."""
        if self.error is not None:
            raise self.error from self.error.inner
        return self.token
