import base64
import binascii

from fastapi import Header, status

from modelperf.errors import http_error, unauthorized
from modelperf.settings import settings


def _decode_token(token: str) -> str:
    """
    Decode base64 token; raise if invalid or unexpected.
    """
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise unauthorized("Invalid API token")

    expected = settings.api_auth_token
    if not expected:
        raise http_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="misconfigured",
            message="API token is not configured",
        )

    if decoded != expected:
        raise unauthorized("Invalid API token")

    return decoded


async def require_api_key(
    authorization: str | None = Header(default=None),
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
) -> str:
    """
    Dashboard API key guard.

    Accepts `Authorization: Bearer <base64(token)>` or `X-API-Key: <base64(token)>`;
    the decoded value must equal APIPROXY_AUTH_TOKEN.
    """
    token_value: str | None = None

    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise unauthorized("Invalid Authorization header, expected 'Bearer <token>'")
        token_value = token
    elif x_api_key:
        token_value = x_api_key.strip() or None

    if not token_value:
        raise unauthorized("Missing Authorization or X-API-Key header")

    return _decode_token(token_value)
