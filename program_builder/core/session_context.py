"""Explicit session context threaded into storage calls."""

from __future__ import annotations

from dataclasses import dataclass

from program_builder.plans.errors import AuthenticationError


@dataclass(frozen=True)
class SessionContext:
    """Identity of the user a request acts for.

    Attributes:
        user_id: Authenticated user ID
        token: Bearer token the identity came from (None for dev override)
    """

    user_id: str
    token: str | None = None


def require_user_id(context: SessionContext | None, action: str) -> str:
    """Return the authenticated user ID or fail.

    Args:
        context: Session context, possibly missing
        action: What the caller was trying to do (used in the error message)

    Raises:
        AuthenticationError: If there is no authenticated user
    """
    if context is None or not context.user_id:
        raise AuthenticationError(f"User must be authenticated to {action}")
    return context.user_id
