"""Event-aware repository base class.

实体事件在 flush 后只挂到 session 上，事务提交成功后才由 EventBus 分发；
回滚的事务不会产生任何事件。
"""

from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.domain.base_entity import BaseEntity
from src.core.domain.events import DomainEvent, EventBus

T = TypeVar("T", bound=BaseEntity)

PENDING_EVENTS_KEY = "pending_domain_events"


def pending_events(session: AsyncSession) -> list[DomainEvent]:
    """Events queued on ``session`` and not yet published."""
    return session.info.setdefault(PENDING_EVENTS_KEY, [])


async def publish_committed_events(session: AsyncSession, event_bus: EventBus) -> None:
    """Publish and drop the events queued on a committed session."""
    events = session.info.pop(PENDING_EVENTS_KEY, [])
    if events:
        await event_bus.publish_all(events)


class EventAwareRepository[T]:
    """Repository base class that queues entity events until commit."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _collect_events_from_entity(self, entity: T) -> None:
        """Move the entity's pending events onto the session."""
        events = entity.get_domain_events()
        if events:
            pending_events(self.session).extend(events)
            entity.clear_domain_events()
