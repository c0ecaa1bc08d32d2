"""
Helpers for reading the authenticated owner out of the JWT context.
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.constants import ErrorMessages


def get_user_id(ctx: dict[str, Any]) -> str:
    """Owner id from the token's sub claim."""
    user_id = ctx.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=ErrorMessages.INVALID_TOKEN,
        )
    return str(user_id)


def get_user_email(ctx: dict[str, Any]) -> str | None:
    return ctx.get("email")
