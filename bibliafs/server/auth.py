"""
Bearer token authentication.

Access tokens are JWTs issued by the identity provider and verified with the
shared secret from ``settings.auth``. The ``sub`` claim is the user id; the
user row is created or refreshed from the claims on every request.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from bibliafs.core.database import get_session
from bibliafs.core.database.entities.users import User
from bibliafs.core.database.repositories.users import UserRepository
from bibliafs.core.logging_config import get_logger
from bibliafs.server.core.config import AuthConfig, settings

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str, config: AuthConfig) -> Dict[str, Any]:
    """Verify signature, expiry and audience of ``token``.

    Raises:
        jwt.PyJWTError: If the token does not verify
    """
    if not config.jwt_secret:
        raise jwt.InvalidTokenError("JWT secret is not configured")
    options = {} if config.jwt_audience else {"verify_aud": False}
    return jwt.decode(
        token,
        config.jwt_secret,
        algorithms=[config.jwt_algorithm],
        audience=config.jwt_audience or None,
        options=options,
    )


async def _user_from_claims(claims: Dict[str, Any], session: AsyncSession) -> User:
    metadata = claims.get("user_metadata") or {}
    return await UserRepository(session).upsert_from_claims(
        claims["sub"],
        claims.get("email"),
        first_name=metadata.get("first_name"),
        last_name=metadata.get("last_name"),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> User:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")
    try:
        claims = decode_token(credentials.credentials, settings.auth)
    except jwt.PyJWTError as e:
        logger.info(f"Rejected access token: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    if not claims.get("sub"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return await _user_from_claims(claims, session)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> Optional[User]:
    """Like ``get_current_user`` but anonymous or invalid callers get ``None``."""
    if credentials is None:
        return None
    try:
        claims = decode_token(credentials.credentials, settings.auth)
    except jwt.PyJWTError:
        return None
    if not claims.get("sub"):
        return None
    return await _user_from_claims(claims, session)


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
