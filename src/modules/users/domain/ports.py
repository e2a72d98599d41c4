"""User module ports."""

from typing import Protocol

from src.modules.users.domain.events import UserMutatedEvent


class UserEventQueue(Protocol):
    """Port for handing user mutation events to the message broker."""

    async def enqueue(self, event: UserMutatedEvent) -> None:
        """Enqueue an event for asynchronous delivery."""
        ...
