"""
Base Repository implementation.
Provides common data access patterns shared by every adapter.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from rest_api.models.base import utcnow


ModelT = TypeVar("ModelT")


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: the SQLAlchemy model class
    - _base_query(): base select with eager loading
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    def _base_query(self) -> Select:
        """Base query; subclasses add selectinload/joinedload options."""
        return select(self.model)

    def get(self, entity_id: str) -> ModelT | None:
        """Find entity by primary key."""
        return self._db.scalar(self._base_query().where(self.model.id == entity_id))

    def add(self, entity: ModelT) -> ModelT:
        """Insert entity and flush so its id is populated."""
        self._db.add(entity)
        self._db.flush()
        return entity

    def save(self, entity: ModelT) -> ModelT:
        """Flush pending changes of an entity and reload it."""
        self._db.add(entity)
        self._db.flush()
        self._db.refresh(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        """Hard delete entity; ORM cascades remove children."""
        self._db.delete(entity)
        self._db.flush()


def upsert(
    db: Session,
    model: type,
    values: dict[str, Any],
    conflict_columns: list[str],
    update_columns: list[str],
) -> None:
    """
    INSERT ... ON CONFLICT DO UPDATE on the unique key of a table.

    Both supported backends (PostgreSQL, SQLite) expose the same
    on_conflict_do_update API through their dialect insert construct.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise NotImplementedError(f"Upsert not supported for dialect '{dialect}'")

    stmt = insert(model).values(**values)
    set_ = {column: stmt.excluded[column] for column in update_columns}
    set_["updated_at"] = utcnow()
    stmt = stmt.on_conflict_do_update(index_elements=conflict_columns, set_=set_)
    db.execute(stmt)
