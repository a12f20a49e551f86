from __future__ import annotations

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AuthenticationError
from app.core.security import decode_access_token
from app.core.settings import Settings, get_settings
from app.db.deps import get_db_session
from app.db.models.user import User
from app.services.access import Actor


logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> Actor:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Not authenticated")

    try:
        token_data = decode_access_token(settings, credentials.credentials)
    except ValueError:
        raise AuthenticationError("Invalid token")

    user = await db.get(User, token_data.user_id)
    if user is None or user.role.value != token_data.role:
        logger.warning("Rejected token for user %s", token_data.user_id)
        raise AuthenticationError("Invalid token")

    return Actor(user_id=user.id, role=user.role)
