"""Base mapper for entity-model conversion."""

from abc import ABC, abstractmethod
from typing import TypeVar

from sqlmodel import SQLModel

E = TypeVar("E")  # Entity type
M = TypeVar("M", bound=SQLModel)  # Model type

# 持久化后不可变的列
_IMMUTABLE_COLUMNS = frozenset({"id", "created_at"})


class BaseMapper[E, M](ABC):
    """Base mapper for converting between domain entities and database models."""

    @abstractmethod
    def to_domain(self, model: M) -> E:
        """Convert database model to domain entity."""
        pass

    @abstractmethod
    def to_model(self, entity: E) -> M:
        """Convert domain entity to database model."""
        pass

    def to_domain_list(self, models: list[M]) -> list[E]:
        """Convert list of models to list of entities."""
        return [self.to_domain(model) for model in models]

    def update_model(self, model: M, entity: E) -> M:
        """Copy the entity's mutable state onto an already-loaded model."""
        source = self.to_model(entity)
        for name in type(source).model_fields:
            if name in _IMMUTABLE_COLUMNS:
                continue
            setattr(model, name, getattr(source, name))
        return model
