"""Logging configuration with structlog integration.

提供两种日志记录方式：
1. loguru: 用于一般调试日志
2. structlog: 用于关键业务事件的结构化日志
"""

import sys
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings


def setup_logging() -> None:
    """Configure application logging with structlog and loguru."""
    # 配置 structlog
    _configure_structlog()

    # 配置 loguru
    _configure_loguru()

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


def _configure_structlog() -> None:
    """配置 structlog 处理器链。"""
    # 根据环境选择渲染器
    if settings.ENVIRONMENT == "local":
        # 本地开发使用人类可读格式
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        # 生产环境使用 JSON 格式
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            # 添加上下文变量
            structlog.contextvars.merge_contextvars,
            # 添加日志级别
            structlog.stdlib.add_log_level,
            # 添加时间戳
            structlog.processors.TimeStamper(fmt="iso"),
            # 添加调用者信息
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            # 格式化异常
            structlog.processors.format_exc_info,
            # 最终渲染
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    """配置 loguru。"""
    # Remove default handler
    logger.remove()

    # Add console handler with appropriate level
    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    # Add file handler for production
    if settings.ENVIRONMENT != "local":
        logger.add(
            "logs/userv_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )


def _get_log_level_number(level: str) -> int:
    """将日志级别字符串转换为数字。"""
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# ============================================================================
# 业务事件日志记录器
# ============================================================================

def get_business_logger() -> structlog.BoundLogger:
    """获取业务事件日志记录器。

    用于记录关键业务事件，输出为结构化格式。

    Usage:
        from src.core.infrastructure.logging import get_business_logger

        log = get_business_logger()
        log.info("user_registered", user_id="123", email="a@example.com")
    """
    return structlog.get_logger("business")


class BusinessEvents:
    """业务事件日志助手类。

    提供统一的业务事件日志记录接口，确保事件格式一致。

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.user_logged_in(user_id="usr_123")
        BusinessEvents.auth_rejected(reason="expired")
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def user_registered(
        cls,
        user_id: str,
        email: str,
        is_staff: bool = False,
        **extra: Any,
    ) -> None:
        """记录用户注册 / 员工账号创建事件。"""
        cls._log.info(
            "user_registered",
            event_type="user",
            user_id=user_id,
            email=email,
            is_staff=is_staff,
            **extra,
        )

    @classmethod
    def user_logged_in(
        cls,
        user_id: str,
        **extra: Any,
    ) -> None:
        """记录登录成功事件。"""
        cls._log.info(
            "user_logged_in",
            event_type="auth",
            user_id=user_id,
            **extra,
        )

    @classmethod
    def login_failed(
        cls,
        email: str,
        reason: str,
        **extra: Any,
    ) -> None:
        """记录登录失败事件。"""
        cls._log.warning(
            "login_failed",
            event_type="auth",
            email=email,
            reason=reason,
            **extra,
        )

    @classmethod
    def tokens_revoked(
        cls,
        user_id: str,
        token_id: str | None,
        count: int,
        **extra: Any,
    ) -> None:
        """记录 token 撤销事件（token_id 为空表示撤销全部会话）。"""
        cls._log.info(
            "tokens_revoked",
            event_type="auth",
            user_id=user_id,
            token_id=token_id,
            count=count,
            **extra,
        )

    @classmethod
    def auth_rejected(
        cls,
        reason: str,
        path: str | None = None,
        **extra: Any,
    ) -> None:
        """记录请求认证失败事件（原因只进日志，不返回给客户端）。"""
        cls._log.warning(
            "auth_rejected",
            event_type="auth",
            reason=reason,
            path=path,
            **extra,
        )

    @classmethod
    def permission_denied(
        cls,
        user_id: str,
        required: list[str],
        application_id: str | None = None,
        **extra: Any,
    ) -> None:
        """记录权限不足事件。"""
        cls._log.warning(
            "permission_denied",
            event_type="authz",
            user_id=user_id,
            required=required,
            application_id=application_id,
            **extra,
        )

    @classmethod
    def user_event_enqueued(
        cls,
        user_id: str,
        event: str,
        **extra: Any,
    ) -> None:
        """记录用户变更事件入队。"""
        cls._log.info(
            "user_event_enqueued",
            event_type="user_event",
            user_id=user_id,
            event=event,
            **extra,
        )

    @classmethod
    def user_event_published(
        cls,
        user_id: str,
        event: str,
        message_id: str,
        **extra: Any,
    ) -> None:
        """记录用户变更事件已投递到消息队列。"""
        cls._log.info(
            "user_event_published",
            event_type="user_event",
            user_id=user_id,
            event=event,
            message_id=message_id,
            **extra,
        )

    @classmethod
    def user_event_publish_failed(
        cls,
        user_id: str,
        event: str,
        error: str,
        **extra: Any,
    ) -> None:
        """记录用户变更事件投递失败。"""
        cls._log.warning(
            "user_event_publish_failed",
            event_type="user_event",
            user_id=user_id,
            event=event,
            error=error,
            **extra,
        )

    @classmethod
    def application_created(
        cls,
        application_id: str,
        name: str,
        created_by: str,
        **extra: Any,
    ) -> None:
        """记录应用创建事件。"""
        cls._log.info(
            "application_created",
            event_type="application",
            application_id=application_id,
            name=name,
            created_by=created_by,
            **extra,
        )

    @classmethod
    def staff_grant_changed(
        cls,
        application_id: str,
        user_id: str,
        action: str,
        **extra: Any,
    ) -> None:
        """记录应用成员授权变更（granted / updated / revoked）。"""
        cls._log.info(
            "staff_grant_changed",
            event_type="application",
            application_id=application_id,
            user_id=user_id,
            action=action,
            **extra,
        )

    @classmethod
    def api_key_created(
        cls,
        key_id: str,
        application_id: str,
        user_id: str,
        created_by: str,
        **extra: Any,
    ) -> None:
        """记录 API Key 签发事件（不记录 key 明文）。"""
        cls._log.info(
            "api_key_created",
            event_type="api_key",
            key_id=key_id,
            application_id=application_id,
            user_id=user_id,
            created_by=created_by,
            **extra,
        )

    @classmethod
    def api_key_changed(
        cls,
        key_id: str,
        application_id: str,
        action: str,
        **extra: Any,
    ) -> None:
        """记录 API Key 变更（updated / deleted）。"""
        cls._log.info(
            "api_key_changed",
            event_type="api_key",
            key_id=key_id,
            application_id=application_id,
            action=action,
            **extra,
        )
