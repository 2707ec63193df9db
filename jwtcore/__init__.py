"""Compact signed token encoding, signing, and verification."""

from jwtcore.core.errors import (
    KeyFormatError,
    NoTokenInRequestError,
    SigningError,
    TokenError,
    TokenValidationError,
    ValidationErrorFlag,
    VerificationError,
)
from jwtcore.core.settings import ParserSettings
from jwtcore.crypto.methods import (
    ES256,
    ES384,
    ES512,
    HS256,
    HS384,
    HS512,
    PS256,
    PS384,
    PS512,
    RS256,
    RS384,
    RS512,
    ECDSAMethod,
    HMACMethod,
    RSAMethod,
    SigningMethod,
)
from jwtcore.crypto.registry import (
    DEFAULT_REGISTRY,
    MethodRegistry,
    get_signing_method,
)
from jwtcore.tokens.parser import (
    Parser,
    get_unverified_claims,
    get_unverified_header,
    parse,
)
from jwtcore.tokens.token import Token
from jwtcore.tokens.types import KeyFunc, ParseResult

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_REGISTRY",
    "ES256",
    "ES384",
    "ES512",
    "HS256",
    "HS384",
    "HS512",
    "PS256",
    "PS384",
    "PS512",
    "RS256",
    "RS384",
    "RS512",
    "ECDSAMethod",
    "HMACMethod",
    "KeyFormatError",
    "KeyFunc",
    "MethodRegistry",
    "NoTokenInRequestError",
    "ParseResult",
    "Parser",
    "ParserSettings",
    "RSAMethod",
    "SigningError",
    "SigningMethod",
    "Token",
    "TokenError",
    "TokenValidationError",
    "ValidationErrorFlag",
    "VerificationError",
    "get_signing_method",
    "get_unverified_claims",
    "get_unverified_header",
    "parse",
]
