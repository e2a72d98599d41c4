"""AMQP 消息发布（基于 kombu）。

由 Celery worker 调用；连接延迟建立并在进程内复用。
"""

import json
from typing import Any
from uuid import uuid4

from kombu import Connection, Queue
from loguru import logger

from src.core.config import settings


class AmqpPublisher:
    """Publishes JSON messages to a durable queue through the default exchange."""

    def __init__(self, url: str | None = None, queue_name: str | None = None):
        self._url = url or settings.AMQP_URL
        self._queue = Queue(queue_name or settings.AMQP_USER_EVENT_QUEUE, durable=True)
        self._connection: Connection | None = None

    @property
    def connection(self) -> Connection:
        """获取连接（延迟初始化）。"""
        if self._connection is None:
            self._connection = Connection(self._url)
        return self._connection

    @property
    def queue_name(self) -> str:
        return self._queue.name

    def publish(self, body: dict[str, Any], headers: dict[str, str]) -> str:
        """发布一条 JSON 消息，返回 message_id。

        Raises:
            kombu.exceptions.OperationalError: broker 不可达
        """
        message_id = str(uuid4())
        producer = self.connection.Producer()
        producer.publish(
            json.dumps(body),
            exchange="",
            routing_key=self._queue.name,
            declare=[self._queue],
            headers=headers,
            content_type="application/json",
            content_encoding="utf-8",
            message_id=message_id,
            delivery_mode=2,
            retry=True,
            retry_policy={"max_retries": 3, "interval_start": 0, "interval_step": 1},
        )
        logger.debug(f"Published message {message_id} to {self._queue.name}")
        return message_id

    def close(self) -> None:
        if self._connection is not None:
            self._connection.release()
            self._connection = None


_publisher: AmqpPublisher | None = None


def get_amqp_publisher() -> AmqpPublisher:
    """获取进程级 AmqpPublisher 单例。"""
    global _publisher
    if _publisher is None:
        _publisher = AmqpPublisher()
    return _publisher
