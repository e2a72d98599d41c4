"""User mutation event queue adapter."""

from src.modules.users.domain.events import UserMutatedEvent
from src.modules.users.domain.ports import UserEventQueue
from src.modules.users.tasks import publish_user_event


class CeleryUserEventQueue(UserEventQueue):
    """Celery-backed user event queue."""

    async def enqueue(self, event: UserMutatedEvent) -> None:
        publish_user_event.delay(
            payload=event.payload(),
            event_type=event.mutation.value,
        )
