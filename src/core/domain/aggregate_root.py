"""Aggregate root base class."""

from typing import TYPE_CHECKING

from src.core.domain.base_entity import BaseEntity

if TYPE_CHECKING:
    from src.core.domain.events import DomainEvent


class AggregateRoot(BaseEntity):
    """Entity whose persistence may raise domain events (users, applications)."""

    def add_domain_event(self, event: "DomainEvent") -> None:
        """Queue an event; it is published once the surrounding transaction commits."""
        self._add_domain_event(event)
