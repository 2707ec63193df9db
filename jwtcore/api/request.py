"""Bearer credential extraction from HTTP requests."""

from starlette.requests import Request

from jwtcore.core.errors import NoTokenInRequestError
from jwtcore.tokens.parser import parse
from jwtcore.tokens.types import KeyFunc, ParseResult

BEARER_SCHEME = "bearer"
ACCESS_TOKEN_PARAM = "access_token"


def extract_bearer(request: Request) -> str:
    """Extract the token from ``Authorization: Bearer <token>``.

    Falls back to the ``access_token`` query parameter when the header is
    absent. A header with another scheme is not a bearer credential.
    """
    auth = request.headers.get("Authorization")
    if auth is not None:
        scheme, _, credentials = auth.partition(" ")
        credentials = credentials.strip()
        if scheme.lower() != BEARER_SCHEME or not credentials:
            raise NoTokenInRequestError("Authorization header is not a Bearer token")
        return credentials
    token = request.query_params.get(ACCESS_TOKEN_PARAM)
    if token:
        return token
    raise NoTokenInRequestError("No bearer token found in request")


def parse_from_request(request: Request, key_func: KeyFunc | None) -> ParseResult:
    """Extract the bearer token and parse it.

    Always uses the default Parser configuration; callers that need an
    allow-list or numeric precision must call ``Parser.parse`` themselves.
    """
    return parse(extract_bearer(request), key_func)
