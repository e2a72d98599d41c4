"""User-related Celery tasks."""

from celery import shared_task
from loguru import logger

from src.core.infrastructure.amqp.publisher import get_amqp_publisher
from src.core.infrastructure.celery.queues import Queues
from src.core.infrastructure.celery.retry import DEFAULT_RETRYABLE_EXCEPTIONS
from src.core.infrastructure.logging import BusinessEvents

# 订阅方按服务名过滤；"*" 表示广播给所有服务
BROADCAST_SERVICES = "*"


def build_event_headers(event_type: str) -> dict[str, str]:
    return {"x-services": BROADCAST_SERVICES, "x-event": event_type}


@shared_task(
    name="src.modules.users.tasks.publish_user_event",
    bind=True,
    max_retries=3,
    default_retry_delay=10,
    autoretry_for=DEFAULT_RETRYABLE_EXCEPTIONS,
    retry_backoff=True,
    queue=Queues.EVENTS,
)
def publish_user_event(_self: object, payload: dict, event_type: str) -> str:
    """Publish a user mutation event to the AMQP user event queue."""
    user_id = str(payload.get("id"))
    try:
        message_id = get_amqp_publisher().publish(
            payload, headers=build_event_headers(event_type)
        )
    except DEFAULT_RETRYABLE_EXCEPTIONS as e:
        logger.warning(f"User event publish failed for {user_id}, will retry: {e}")
        BusinessEvents.user_event_publish_failed(
            user_id=user_id, event=event_type, error=str(e)
        )
        raise
    BusinessEvents.user_event_published(
        user_id=user_id, event=event_type, message_id=message_id
    )
    return message_id
