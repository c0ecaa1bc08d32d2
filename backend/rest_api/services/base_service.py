"""
Base Service Class for Clean Architecture.

Provides the shared plumbing of every domain service:
- Repository access (no direct queries in routers)
- Ownership checks against the caller
- Commit with rollback and a structured DatabaseError

Architecture:
    Router (thin) -> Service (business logic) -> Repository (data access) -> Model

Usage:
    class MenuService(BaseService):
        def get(self, menu_id: str, user_id: str) -> Menu:
            menu = self._menus.get(menu_id)
            self._ensure_owned(menu, menu and menu.owner_id, user_id, "Menu", menu_id)
            return menu
"""

from __future__ import annotations

from abc import ABC
from contextlib import contextmanager
from typing import Any, Iterator, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    OwnershipError,
)

logger = get_logger(__name__)

EntityT = TypeVar("EntityT")


class BaseService(ABC):
    """Abstract base service for domain operations."""

    def __init__(self, db: Session):
        self._db = db

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    def _ensure_owned(
        self,
        entity: EntityT | None,
        owner_id: str | None,
        user_id: str,
        entity_name: str,
        entity_id: str,
    ) -> EntityT:
        """
        Unknown id -> 404, someone else's row -> 403.
        Returns the entity for chaining.
        """
        if entity is None:
            raise NotFoundError(entity_name, entity_id)
        if owner_id != user_id:
            raise OwnershipError(entity_name, entity_id, user_id=user_id)
        return entity

    @contextmanager
    def _writing(self, operation: str, **log_context: Any) -> Iterator[None]:
        """
        Run flushes and the final commit as one unit of work.

        Integrity violations surface as 409, any other database failure
        as 500; the session is rolled back in both cases.
        """
        try:
            yield
            safe_commit(self._db)
        except IntegrityError as e:
            self._db.rollback()
            raise ConflictError(
                f"Conflicting data during {operation}",
                operation=operation,
                error=str(e.orig),
                **log_context,
            )
        except SQLAlchemyError as e:
            self._db.rollback()
            raise DatabaseError(operation, error=str(e), **log_context)

    def _commit(self, operation: str, **log_context: Any) -> None:
        """Commit pending changes; see _writing for error mapping."""
        with self._writing(operation, **log_context):
            pass
