"""Bearer-token verification for identity-provider issued tokens.

The identity provider signs ``{"sub": <auth id>}`` with the shared
``auth_secret``. This service only verifies tokens; ``issue_token`` exists
for the provider side, local development and tests.
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.app.config import settings
from huddle.app.db import get_db
from huddle.app.errors import UnauthenticatedError
from huddle.app.models.user import User
from huddle.app.services.user_directory import get_user_by_auth_id

logger = logging.getLogger(__name__)

_TOKEN_SALT = "huddle-auth"

bearer_scheme = HTTPBearer(auto_error=False)


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(settings.auth_secret, salt=_TOKEN_SALT)


def issue_token(auth_id: str) -> str:
    return _serializer().dumps({"sub": auth_id})


def verify_token(token: str) -> str:
    """Return the auth id carried by ``token`` or raise UnauthenticatedError."""
    try:
        payload = _serializer().loads(token, max_age=settings.auth_token_max_age)
    except SignatureExpired as exc:
        raise UnauthenticatedError("Session expired") from exc
    except BadSignature as exc:
        logger.info("Rejected bearer token with bad signature")
        raise UnauthenticatedError("Invalid token") from exc

    sub = payload.get("sub") if isinstance(payload, dict) else None
    if not sub:
        raise UnauthenticatedError("Invalid token")
    return sub


async def get_auth_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """FastAPI dependency: the authenticated identity, no user record required."""
    if credentials is None:
        raise UnauthenticatedError()
    return verify_token(credentials.credentials)


async def get_current_user(
    auth_id: str = Depends(get_auth_id),
    db: AsyncSession = Depends(get_db),
) -> User:
    """FastAPI dependency: the registered user behind the bearer token."""
    user = await get_user_by_auth_id(db, auth_id)
    if user is None:
        raise UnauthenticatedError("No user registered for this account")
    return user
