"""Celery 应用配置。

- 使用 JSON 序列化
- 按功能拆分队列
- 支持任务重试与退避
"""

from celery import Celery
from kombu import Exchange, Queue

from src.core.config import settings
from src.core.infrastructure.celery.queues import TASK_ROUTES, Queues


def create_celery_app() -> Celery:
    """创建并配置 Celery 应用。"""
    app = Celery(settings.PROJECT_NAME)

    app.conf.update(
        # Broker & Backend
        broker_url=settings.celery_broker_url,
        result_backend=settings.celery_result_backend,
        # 序列化配置
        task_serializer=settings.CELERY_TASK_SERIALIZER,
        result_serializer=settings.CELERY_RESULT_SERIALIZER,
        accept_content=settings.CELERY_ACCEPT_CONTENT,
        # 时区配置
        timezone=settings.TIMEZONE,
        enable_utc=True,
        # 任务配置
        task_track_started=True,
        task_time_limit=60,
        task_soft_time_limit=45,
        # 重试配置
        task_default_retry_delay=settings.CELERY_TASK_DEFAULT_RETRY_DELAY,
        task_max_retries=settings.CELERY_TASK_MAX_RETRIES,
        task_acks_late=True,  # 任务完成后才确认
        task_reject_on_worker_lost=True,  # Worker 丢失时拒绝任务
        # 结果配置
        result_expires=3600,  # 结果保留 1 小时
        task_ignore_result=True,
        # Worker 配置
        worker_prefetch_multiplier=1,  # 一次只取一个任务
    )

    default_exchange = Exchange("default", type="direct")
    app.conf.task_queues = (
        Queue(Queues.EVENTS, default_exchange, routing_key=Queues.EVENTS),
    )
    app.conf.task_routes = TASK_ROUTES
    app.conf.task_default_queue = Queues.EVENTS

    # 任务应在各模块的 tasks.py 中定义
    app.autodiscover_tasks(["src.modules.users"], related_name="tasks")
    return app


celery_app = create_celery_app()
