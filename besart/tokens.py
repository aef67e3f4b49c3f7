"""Issuing and checking the JSON Web Tokens that guard private routes."""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Any, Callable, Mapping, Optional

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt import PyJWKClient
from jwt.exceptions import PyJWKClientConnectionError

ISSUER = "https://accounts.besarts.biz.id/realms/besart"
AUDIENCE = "account"
CONTEXT_KEY = "token_data"
JWKS_URL = "https://accounts.besarts.biz.id/realms/besart/protocol/openid-connect/certs"
TOKEN_LIFETIME = timedelta(hours=3)

_ALGORITHMS = [
    "RS256", "RS384", "RS512",
    "PS256", "PS384", "PS512",
    "ES256", "ES384", "ES512",
    "EdDSA",
]

KeyResolver = Callable[[str], Any]


class AuthorizationError(Exception):
    """Raised when a request cannot be authorised."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def build_claims(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return the standard claims for a new token, overlaid with ``data``."""
    now = int(time.time())
    claims: dict[str, Any] = {
        "nbf": now,
        "iat": now,
        "exp": now + int(TOKEN_LIFETIME.total_seconds()),
        "iss": ISSUER,
        "aud": [AUDIENCE],
    }
    claims.update(data)
    return claims


def build_token(data: Mapping[str, Any], private_key: str) -> tuple[str, int]:
    """Sign a token with an RSA private key in PEM form.

    Returns the token and its expiry time in Unix seconds.
    """
    claims = build_claims(data)
    pem_bytes = private_key.encode("utf-8")
    loaded = serialization.load_pem_private_key(pem_bytes, None)
    if not isinstance(loaded, rsa.RSAPrivateKey):
        raise ValueError("key is not a valid RSA private key")
    signed = jwt.encode(claims, loaded, algorithm="RS256")
    return signed, claims["exp"]


def _jwks_resolver() -> KeyResolver:
    client = PyJWKClient(JWKS_URL)

    def resolve(raw: str) -> Any:
        try:
            return client.get_signing_key_from_jwt(raw).key
        except PyJWKClientConnectionError as exc:
            raise AuthorizationError("failed to create JWK Set") from exc

    return resolve


def _audience(claims: Mapping[str, Any]) -> list[str]:
    aud = claims.get("aud")
    if isinstance(aud, str):
        return [aud]
    if isinstance(aud, list) and all(isinstance(a, str) for a in aud):
        return aud
    raise ValueError("invalid audience claim")


def authorize_token(
    authorization: str, signing_key_resolver: Optional[KeyResolver] = None
) -> dict[str, Any]:
    """Check an ``Authorization`` header value and return the token's claims.

    ``signing_key_resolver`` maps the raw token to the key that verifies it;
    by default keys are fetched from the identity provider's JWK set.
    Raises AuthorizationError when the token is not acceptable.
    """
    parts = authorization.split(" ")
    if len(parts) < 2 or (len(parts) != 2 and parts[0] != "Bearer"):
        raise AuthorizationError("invalid authorization header")
    raw = parts[1]

    resolver = signing_key_resolver or _jwks_resolver()
    try:
        verifier = resolver(raw)
        claims = jwt.decode(
            raw,
            verifier,
            algorithms=_ALGORITHMS,
            options={"verify_aud": False, "verify_iss": False, "verify_iat": False},
        )
    except AuthorizationError:
        raise
    except Exception as exc:
        raise AuthorizationError("failed to parse the JWT") from exc

    if not isinstance(claims, dict):
        raise AuthorizationError("invalid token")

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or int(exp) < int(time.time()):
        raise AuthorizationError("token has been expired")

    if claims.get("iss") != ISSUER:
        raise AuthorizationError("invalid token")

    try:
        audience = _audience(claims)
    except ValueError as exc:
        raise AuthorizationError("invalid token") from exc
    if not audience or audience[0] != AUDIENCE:
        raise AuthorizationError("invalid token")

    return dict(claims)