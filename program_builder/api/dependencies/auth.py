"""FastAPI authentication dependency.

Builds the SessionContext that is threaded into every storage call, from a
bearer token in the Authorization header or the ``session`` cookie.
Supports a dev override via DEV_USER_ID.
"""

from __future__ import annotations

from typing import NoReturn

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from loguru import logger

from program_builder.config.settings import settings
from program_builder.core.auth_jwt import decode_access_token
from program_builder.core.session_context import SessionContext

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def _raise_unauthorized(detail: str = "Authentication required") -> NoReturn:
    logger.warning(f"Unauthorized request: {detail}")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_session_context(request: Request, token: str | None = Depends(oauth2_scheme)) -> SessionContext:
    """FastAPI dependency returning the current user's session context.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if settings.dev_user_id:
        logger.debug(f"Using dev mode user override: {settings.dev_user_id}")
        return SessionContext(user_id=settings.dev_user_id)

    auth_token = token or request.cookies.get("session")
    if not auth_token:
        _raise_unauthorized()

    try:
        user_id = decode_access_token(auth_token)
    except ValueError as e:
        _raise_unauthorized(str(e))

    return SessionContext(user_id=user_id, token=auth_token)
