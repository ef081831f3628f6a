"""
Base repository class providing common database operations.

Model-specific repositories inherit from this class to reuse the generic
create / read logic and add their own queries on top.

Repositories only `flush()`; committing is the caller's decision (the API
route commits after a successful create), so several operations can share
one transaction and a test can roll everything back.
"""

import logging
import time
from typing import Any, Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.base import Base
from ..exceptions.base import InvalidFieldError, NotFoundError, RepositoryError
from ..exceptions.mapper import db_error_handler
from ..validators.exception_validators import find_unknown_model_kwargs, get_required_columns

ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over one SQLAlchemy model.

    Type Parameters:
        ModelType: The model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (e.g. Post, not Post()).
            db: The async database session, injected per request or per test.
        """
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def _event(self, level: int, event: str, **context: Any) -> None:
        logger.log(level, event, extra={"model": self.model_name, **context})

    # =================================================================================================================
    # Create
    # =================================================================================================================

    def _check_create_values(self, values: dict[str, Any]) -> None:
        """
        Reject unknown fields (InvalidFieldError) and NOT NULL fields that are
        missing or None (RepositoryError) before anything is sent to the DB.
        """
        unknown = find_unknown_model_kwargs(self.model, values)
        if unknown:
            self._event(logging.INFO, "repo.create.invalid_fields", invalid_fields=unknown)
            raise InvalidFieldError(
                f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown
            )

        missing = [name for name in get_required_columns(self.model) if values.get(name) is None]
        if missing:
            self._event(logging.INFO, "repo.create.missing_required", missing_fields=missing)
            raise RepositoryError(
                f"Missing required field(s): {', '.join(missing)} for {self.model_name}", fields=missing
            )

    async def create(self, **kwargs) -> ModelType:
        """
        Validate, insert and return the entity with id and server defaults loaded.

        Log events: repo.create.start (DEBUG, keys only, never values),
        repo.create.invalid_fields / repo.create.missing_required (INFO),
        repo.create.success (INFO, id and duration_ms).
        """
        self._event(logging.DEBUG, "repo.create.start", provided_keys=sorted(kwargs))
        self._check_create_values(kwargs)

        start = time.perf_counter()
        async with db_error_handler(self.db, self.model_name):
            entity = self.model(**kwargs)
            self.db.add(entity)
            await self.db.flush()
            await self.db.refresh(entity)

        self._event(
            logging.INFO,
            "repo.create.success",
            id=str(entity.id),
            duration_ms=int((time.perf_counter() - start) * 1000),
        )
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def get_by_id(self, entity_id: UUID) -> ModelType | None:
        """
        The entity with this id, or None.

        Raises:
            RepositoryError: If the query fails.
        """
        async with db_error_handler(self.db, self.model_name):
            entity = await self.db.get(self.model, entity_id)
        self._event(logging.DEBUG, "repo.get_by_id", id=str(entity_id), found=entity is not None)
        return entity

    async def get_by_id_or_raise(self, entity_id: UUID) -> ModelType:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model_name} with ID {entity_id} not found")
        return entity

    def _ordered(self, query: Select, order_by: str | None) -> Select:
        """
        - `order_by` names a column: ascending on it, then id.
        - `order_by` names nothing on the model: ignored with a warning.
        - no `order_by` on a model with `created_at`: newest first, then id.
        The trailing id keeps rows created in the same instant in a fixed order.
        """
        if order_by and hasattr(self.model, order_by):
            return query.order_by(getattr(self.model, order_by), self.model.id)
        if order_by:
            logger.warning(
                "Ignored invalid 'order_by' field: '%s' does not exist on %s", order_by, self.model_name
            )
        if hasattr(self.model, "created_at"):
            return query.order_by(self.model.created_at.desc(), self.model.id)
        return query.order_by(self.model.id)

    async def get_all(
        self,
        offset: int = 0,                # how many records to skip
        limit: int = 100,               # max number of records to return
        order_by: str | None = None,    # optional field to sort by
    ) -> list[ModelType]:
        query = self._ordered(select(self.model), order_by).offset(offset).limit(limit)

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(query)
            entities = list(result.scalars().all())

        self._event(logging.DEBUG, "repo.get_all", count=len(entities), offset=offset, limit=limit)
        return entities

    async def count(self, **filters: Any) -> int:
        """
        Count entities matching `filters`; unknown fields and None values are skipped.
        """
        conditions = [
            getattr(self.model, name) == value
            for name, value in filters.items()
            if value is not None and hasattr(self.model, name)
        ]
        query = select(func.count()).select_from(self.model).where(*conditions)

        async with db_error_handler(self.db, self.model_name):
            total = (await self.db.execute(query)).scalar_one()

        return total
