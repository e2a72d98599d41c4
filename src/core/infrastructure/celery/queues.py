"""Celery 队列定义。

- q_events: 用户变更事件投递任务
"""

from enum import StrEnum


class Queues(StrEnum):
    """Celery 队列枚举。"""

    EVENTS = "q_events"


# 队列路由配置
# 任务名称模式 -> 队列
TASK_ROUTES = {
    "src.modules.users.tasks.*": {"queue": Queues.EVENTS},
}
