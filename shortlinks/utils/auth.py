"""Verification of session tokens issued by the external identity provider.

The provider owns sign-in; this service only checks the token signature and
reads the subject (``sub``) claim, which becomes the link owner id.
"""

from functools import wraps

import jwt
from flask import current_app, request

from ..errors import AuthError

_jwks_clients: dict[str, jwt.PyJWKClient] = {}


def _jwks_client(url: str) -> jwt.PyJWKClient:
    client = _jwks_clients.get(url)
    if client is None:
        client = jwt.PyJWKClient(url)
        _jwks_clients[url] = client
    return client


def _signing_key(token: str):
    config = current_app.config
    jwks_url = config.get("AUTH_JWKS_URL")
    algorithms = config.get("AUTH_ALGORITHMS") or []

    if jwks_url:
        key = _jwks_client(jwks_url).get_signing_key_from_jwt(token).key
        return key, algorithms or ["RS256"]

    secret = config.get("AUTH_JWT_SECRET")
    if not secret:
        raise AuthError("Authentication is not configured")
    return secret, algorithms or ["HS256"]


def decode_token(token: str) -> dict:
    key, algorithms = _signing_key(token)
    return jwt.decode(
        token,
        key,
        algorithms=algorithms,
        audience=current_app.config.get("AUTH_AUDIENCE"),
        issuer=current_app.config.get("AUTH_ISSUER"),
        options={"require": ["exp", "sub"]},
    )


def _bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if " " in auth_header:
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer":
            return None
        return token.strip() or None
    return auth_header.strip() or None


def current_user_id() -> str:
    """Owner id of the authenticated caller; raises AuthError otherwise."""
    token = _bearer_token()
    if not token:
        raise AuthError("Token is missing!")

    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired!")
    except jwt.PyJWTError as exc:
        current_app.logger.warning(f"Rejected session token: {exc}")
        raise AuthError("Invalid token!")

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise AuthError("Invalid token!")
    return user_id


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        user_id = current_user_id()
        return f(user_id, *args, **kwargs)

    return decorated
