"""Generic SQLModel repository.

提供所有实体共用的 CRUD + 过滤分页查询；子类只需指定 ``model``，
并按需补充实体特有的查询。
"""

from typing import Any, ClassVar, TypeVar

from loguru import logger
from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import col, select

from src.core.domain.base_entity import BaseEntity
from src.core.domain.exceptions import DomainException
from src.core.domain.filters import FilterQuery, Pagination
from src.core.infrastructure.database.base_model import BaseModel
from src.core.infrastructure.database.event_aware_repository import EventAwareRepository
from src.core.infrastructure.database.filters import compile_filter
from src.core.infrastructure.database.mapper import BaseMapper

E = TypeVar("E", bound=BaseEntity)
M = TypeVar("M", bound=BaseModel)

# psycopg: SQLSTATE 23505；sqlite: 扩展错误名
UNIQUE_VIOLATION_SQLSTATE = "23505"
SQLITE_UNIQUE_ERRORS = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"})


def is_unique_violation(error: IntegrityError) -> bool:
    """True when the driver reports a unique/primary key violation.

    Foreign key and not-null violations are not conflicts and return False.
    """
    orig = error.orig
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return getattr(orig, "sqlite_errorname", None) in SQLITE_UNIQUE_ERRORS


class SQLModelRepository[E, M](EventAwareRepository[E]):
    """CRUD and filtered listing over one SQLModel table (soft-delete aware)."""

    model: ClassVar[type[BaseModel]]

    def __init__(self, session: AsyncSession, mapper: BaseMapper[E, M]):
        super().__init__(session)
        self.mapper = mapper
        self.logger = logger

    def _conflict_error(self, entity: E) -> DomainException | None:
        """Domain error raised when a write hits a unique constraint.

        ``None`` lets the IntegrityError propagate unchanged.
        """
        return None

    async def _flush(self, entity: E, model: M) -> None:
        """Flush ``model`` inside a savepoint so a conflict leaves the transaction usable."""
        try:
            async with self.session.begin_nested():
                self.session.add(model)
                await self.session.flush()
        except IntegrityError as e:
            conflict = self._conflict_error(entity) if is_unique_violation(e) else None
            if conflict is None:
                raise
            self.logger.info(f"{self.model.__name__} write conflict: {conflict.message}")
            raise conflict from e

    def _select(self) -> Select[Any]:
        return select(self.model).where(col(self.model.is_deleted).is_(False))

    async def find_one(self, *conditions: ColumnElement[bool]) -> E | None:
        statement = self._select().where(*conditions).limit(1)
        result = await self.session.execute(statement)
        model = result.scalars().first()
        return self.mapper.to_domain(model) if model else None

    async def get_by_id(self, entity_id: str) -> E | None:
        return await self.find_one(col(self.model.id) == entity_id)

    async def count(self, *conditions: ColumnElement[bool]) -> int:
        return await self._count(self._select().where(*conditions))

    async def find_many(
        self, query: FilterQuery, pagination: Pagination
    ) -> tuple[list[E], int]:
        statement = self._select().where(*compile_filter(query, self.model))
        return await self._paginate(statement, pagination)

    async def create(self, entity: E) -> E:
        model = self.mapper.to_model(entity)
        await self._flush(entity, model)
        await self.session.refresh(model)
        self._collect_events_from_entity(entity)
        return self.mapper.to_domain(model)

    async def update(self, entity: E) -> E:
        existing = await self._load(entity.id)
        self.mapper.update_model(existing, entity)
        await self._flush(entity, existing)
        await self.session.refresh(existing)
        self._collect_events_from_entity(entity)
        return self.mapper.to_domain(existing)

    async def delete(self, entity: E | str) -> bool:
        entity_id = entity if isinstance(entity, str) else entity.id
        return await self.soft_delete(col(self.model.id) == entity_id) > 0

    async def soft_delete(self, *conditions: ColumnElement[bool]) -> int:
        """Mark every live row matching ``conditions`` as deleted."""
        statement = (
            update(self.model)
            .where(col(self.model.is_deleted).is_(False), *conditions)
            .values(is_deleted=True, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        return result.rowcount or 0

    async def _load(self, entity_id: str) -> M:
        statement = select(self.model).where(col(self.model.id) == entity_id)
        result = await self.session.execute(statement)
        model = result.scalar_one_or_none()
        if model is None:
            raise ValueError(f"{self.model.__name__} with id {entity_id} not found")
        return model

    async def _count(self, statement: Select[Any]) -> int:
        count_statement = select(func.count()).select_from(statement.subquery())
        result = await self.session.execute(count_statement)
        return result.scalar_one()

    async def _paginate(
        self, statement: Select[Any], pagination: Pagination
    ) -> tuple[list[E], int]:
        total = await self._count(statement)
        page = (
            statement.order_by(col(self.model.created_at).desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        result = await self.session.execute(page)
        return self.mapper.to_domain_list(list(result.scalars().all())), total
