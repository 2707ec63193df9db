"""FastAPI dependency injection for bearer token authentication."""

from fastapi import HTTPException, Request, status

from jwtcore.api.request import extract_bearer
from jwtcore.core.errors import NoTokenInRequestError
from jwtcore.tokens.parser import Parser
from jwtcore.tokens.token import Token
from jwtcore.tokens.types import KeyFunc

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


class BearerTokenAuth:
    """Resolve the verified Token for a request or reject it with 401."""

    def __init__(self, key_func: KeyFunc, parser: Parser | None = None) -> None:
        self._key_func = key_func
        self._parser = parser or Parser()

    async def __call__(self, request: Request) -> Token:
        try:
            token_string = extract_bearer(request)
        except NoTokenInRequestError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="missing_token",
                headers=_CHALLENGE,
            ) from exc
        result = self._parser.parse(token_string, self._key_func)
        if result.error is not None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="invalid_token",
                headers=_CHALLENGE,
            ) from result.error
        return result.token
