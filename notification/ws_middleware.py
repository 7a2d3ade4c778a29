"""
Websocket authentication: the browser cannot set headers on a websocket
handshake, so the access token is read from the ``access_token`` cookie.
"""
import logging

import jwt
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.conf import settings

from campusmart.middleware.jwt_cookie_middleware import ACCESS_COOKIE

logger = logging.getLogger(__name__)


def token_from_cookies(raw_cookies):
    prefix = ACCESS_COOKIE + "="
    for part in raw_cookies.split(";"):
        part = part.strip()
        if part.startswith(prefix):
            return part[len(prefix):]
    return None


def decode_access_token(token):
    """Return the user id carried by a valid access token, else None."""
    jwt_settings = settings.SIMPLE_JWT
    try:
        payload = jwt.decode(
            token,
            jwt_settings.get("SIGNING_KEY", settings.SECRET_KEY),
            algorithms=[jwt_settings.get("ALGORITHM", "HS256")],
        )
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected websocket token: %s", exc)
        return None
    if payload.get("token_type") != "access":
        return None
    return payload.get("user_id")


@database_sync_to_async
def active_user(user_id):
    from django.contrib.auth import get_user_model
    from django.contrib.auth.models import AnonymousUser

    User = get_user_model()
    return User.objects.filter(pk=user_id, is_active=True).first() or AnonymousUser()


class JWTAuthMiddleware(BaseMiddleware):
    async def __call__(self, scope, receive, send):
        from django.contrib.auth.models import AnonymousUser

        headers = dict(scope.get("headers", []))
        token = token_from_cookies(headers.get(b"cookie", b"").decode())
        user_id = decode_access_token(token) if token else None

        scope = dict(scope, user=await active_user(user_id) if user_id else AnonymousUser())
        return await super().__call__(scope, receive, send)
