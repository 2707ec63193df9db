"""Tests for the FastAPI bearer token dependency."""

import time
from collections.abc import AsyncIterator
from typing import Annotated

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.responses import JSONResponse

from jwtcore.api.deps import BearerTokenAuth
from jwtcore.core.settings import ParserSettings
from jwtcore.crypto.methods import HS256, RS256
from jwtcore.crypto.types import SigningKeyData
from jwtcore.tokens.parser import Parser
from jwtcore.tokens.token import Token

HTTP_UNAUTHORIZED = 401


def _build_app(auth: BearerTokenAuth) -> FastAPI:
    app = FastAPI()

    @app.get("/me")
    async def me(token: Annotated[Token, Depends(auth)]) -> JSONResponse:
        return JSONResponse({"sub": token.claims.get("sub")})

    return app


@pytest.fixture
async def client(rsa_keys: SigningKeyData) -> AsyncIterator[AsyncClient]:
    auth = BearerTokenAuth(
        key_func=lambda _t: rsa_keys.public_key_pem,
        parser=Parser(ParserSettings(valid_methods="RS256")),
    )
    transport = ASGITransport(app=_build_app(auth))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestBearerTokenAuth:
    """Tests for BearerTokenAuth."""

    async def test_valid_token(
        self, client: AsyncClient, rsa_keys: SigningKeyData
    ) -> None:
        token = Token.new(RS256, claims={"sub": "user-1"}).signed_string(
            rsa_keys.private_key_pem
        )
        resp = await client.get("/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200
        assert resp.json() == {"sub": "user-1"}

    async def test_missing_token(self, client: AsyncClient) -> None:
        resp = await client.get("/me")
        assert resp.status_code == HTTP_UNAUTHORIZED
        assert resp.json()["detail"] == "missing_token"
        assert resp.headers["WWW-Authenticate"] == "Bearer"

    async def test_expired_token(
        self, client: AsyncClient, rsa_keys: SigningKeyData
    ) -> None:
        token = Token.new(
            RS256, claims={"sub": "user-1", "exp": time.time() - 100}
        ).signed_string(rsa_keys.private_key_pem)
        resp = await client.get("/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == HTTP_UNAUTHORIZED
        assert resp.json()["detail"] == "invalid_token"

    async def test_disallowed_algorithm(self, client: AsyncClient) -> None:
        token = Token.new(HS256, claims={"sub": "user-1"}).signed_string(
            b"some-shared-secret"
        )
        resp = await client.get("/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == HTTP_UNAUTHORIZED

    async def test_garbage_token(self, client: AsyncClient) -> None:
        resp = await client.get("/me", headers={"Authorization": "Bearer bad-jwt"})
        assert resp.status_code == HTTP_UNAUTHORIZED
        assert resp.json()["detail"] == "invalid_token"
