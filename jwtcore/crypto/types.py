"""Type definitions for signing key material."""

from pydantic import BaseModel


class SigningKeyData(BaseModel):
    """An asymmetric keypair for token signing."""

    kid: str
    algorithm: str
    private_key_pem: str
    public_key_pem: str
