"""Bearer token verification.

Tokens are minted by the identity provider in front of this service. They
carry the user ID in the 'sub' claim and must name the configured issuer
(and audience, when one is configured).
"""

from __future__ import annotations

from jose import JWTError, jwt
from loguru import logger

from program_builder.config.settings import settings


def decode_access_token(token: str) -> str:
    """Decode and verify a JWT access token.

    Args:
        token: JWT token string

    Returns:
        User ID (string) from token 'sub' claim

    Raises:
        ValueError: If verification is not configured, or the token is
            invalid, expired, or issued for someone else
    """
    if not settings.auth_secret_key:
        raise ValueError("Token verification is not configured")
    try:
        payload = jwt.decode(
            token,
            settings.auth_secret_key,
            algorithms=[settings.auth_algorithm],
            issuer=settings.auth_issuer,
            audience=settings.auth_audience or None,
        )
    except JWTError as e:
        logger.warning(f"JWT decode failed: {e}")
        raise ValueError("Invalid or expired token") from e

    user_id = payload.get("sub")
    if not user_id:
        raise ValueError("Token missing user ID")
    return str(user_id)
