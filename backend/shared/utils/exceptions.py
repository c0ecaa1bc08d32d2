"""
Centralized HTTP exceptions for consistent error handling.

Usage:
    from shared.utils.exceptions import NotFoundError, ForbiddenError, ValidationError

    raise NotFoundError("Menu", menu_id)
    raise ForbiddenError("edit this menu", owner_id=owner_id)
    raise ValidationError("Unsupported language code", language_code="xx")
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions inherit from this class so every error
    reaching the client has been logged with its context.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Menu", menu_id)
        raise NotFoundError("Section", section_id, menu_id=menu_id)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 403 Forbidden Errors
# =============================================================================


class ForbiddenError(AppException):
    """
    Ownership/permission error (403).

    Usage:
        raise ForbiddenError("edit this menu")
        raise ForbiddenError("generate images for another user", user_id=user_id)
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not allowed to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            action=action,
            **log_context,
        )


class OwnershipError(ForbiddenError):
    """The resource exists but belongs to another owner."""

    def __init__(self, entity: str, entity_id: str | None = None, **log_context: Any):
        super().__init__(
            f"access this {entity.lower()}",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Text is required")
        raise ValidationError("Unknown allergen code", field="allergen", value="xx")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class InvalidCodeError(ValidationError):
    """A code outside one of the closed vocabularies."""

    def __init__(self, vocabulary: str, code: str, **log_context: Any):
        super().__init__(
            f"Invalid {vocabulary}: '{code}'",
            vocabulary=vocabulary,
            code=code,
            **log_context,
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("Restaurant already has a primary menu")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class DuplicateEntityError(ConflictError):
    """Entity already exists."""

    def __init__(self, entity: str, identifier: str | None = None, **log_context: Any):
        if identifier:
            detail = f"{entity} '{identifier}' already exists"
        else:
            detail = f"{entity} already exists"

        super().__init__(detail, entity=entity, identifier=identifier, **log_context)


# =============================================================================
# 422 Unprocessable Content
# =============================================================================


class UnsupportedContentKindError(AppException):
    """
    A recognised content kind that has nowhere to be stored (422).

    Menu names and descriptions are collected for translation but no
    menu translation table exists.
    """

    def __init__(self, kind: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unsupported content kind '{kind}': menu names and descriptions have no translation storage",
            log_level="warning",
            kind=kind,
            **log_context,
        )


# =============================================================================
# 500 / 502 Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    Usage:
        raise InternalError("Translation provider is not configured")
    """

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )


class DatabaseError(InternalError):
    """Database operation failed."""

    def __init__(self, operation: str, **log_context: Any):
        detail = f"Database error during {operation}. Please try again."
        super().__init__(detail, operation=operation, **log_context)


class StorageError(InternalError):
    """Object storage operation failed."""

    def __init__(self, operation: str, **log_context: Any):
        super().__init__(f"Storage error during {operation}", operation=operation, **log_context)


class UpstreamError(AppException):
    """
    The language model answered badly or not at all (502).

    Usage:
        raise UpstreamError("The model returned an empty translation")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            log_level="error",
            **log_context,
        )
