"""userv Backend - 用户、应用与 API Key 管理服务入口。"""

from collections.abc import Callable
from typing import Any, cast

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.concurrency import asynccontextmanager
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from src.core.application import dependencies as core_app_deps
from src.core.application import security as app_security
from src.core.config import settings
from src.core.domain.events import EventBus
from src.core.domain.exceptions import DomainException
from src.core.infrastructure.context import create_app_context
from src.core.infrastructure.database.session import check_db_health, init_db
from src.core.infrastructure.health import HealthStatus
from src.core.infrastructure.logging import setup_logging
from src.core.infrastructure.redis import (
    RedisClient,
    RedisUnavailableError,
    get_redis_client,
)
from src.core.infrastructure.security import guard as infra_guard
from src.core.infrastructure.security import hasher as infra_hasher
from src.core.infrastructure.security import jwt as infra_jwt
from src.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
    validation_exception_handler,
)
from src.core.interfaces.http.routers import api_router
from src.modules.api_keys.application import dependencies as api_keys_app_deps
from src.modules.api_keys.infrastructure import dependencies as api_keys_infra_deps
from src.modules.applications.application import dependencies as apps_app_deps
from src.modules.applications.infrastructure import dependencies as apps_infra_deps
from src.modules.users.application import dependencies as users_app_deps
from src.modules.users.application.handlers import PublishUserMutationHandler
from src.modules.users.domain.events import UserMutatedEvent
from src.modules.users.infrastructure import dependencies as users_infra_deps
from src.modules.users.infrastructure.event_queue import CeleryUserEventQueue

VERSION = "0.1.0"


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


openapi_security_schemes = {
    "BearerAuth": {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
        "description": "Access token returned by /auth/login",
    },
}


def custom_openapi():
    """Customize OpenAPI schema to include the bearer auth scheme."""
    if app.openapi_schema:
        return app.openapi_schema
    from fastapi.openapi.utils import get_openapi

    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    schema["components"] = schema.get("components", {})
    schema["components"]["securitySchemes"] = openapi_security_schemes
    app.openapi_schema = schema
    return schema


def register_event_handlers(event_bus: EventBus) -> None:
    """Subscribe in-process domain event handlers."""
    event_bus.subscribe(
        UserMutatedEvent, PublishUserMutationHandler(CeleryUserEventQueue())
    )


# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        enable_tracing=True,
        environment=settings.ENVIRONMENT,
    )

context = create_app_context()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info("Starting userv backend...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    logger.info("Initializing database connection...")
    await init_db(context.engine)

    try:
        await context.redis.ensure_available()
    except RedisUnavailableError as e:
        # token 校验会按未认证处理，服务仍可启动
        logger.warning(f"Redis unavailable at startup: {e}")

    register_event_handlers(context.event_bus)

    yield

    logger.info("Shutting down userv backend...")
    context.event_bus.clear_handlers()
    await context.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "用户、应用与 API Key 管理服务\n\n"
        "## 认证方式\n\n"
        "- **Bearer**: 通过 `/auth/login` 获取 access token"
    ),
    version=VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    root_path=settings.ROOTPATH,
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)
app.openapi = cast(Callable[[], dict[str, Any]], custom_openapi)
app.state.context = context


def get_token_cache(request: Request) -> RedisClient:
    return get_redis_client(request)


# Dependency overrides (application -> infrastructure)

# Core
app.dependency_overrides[core_app_deps.get_token_codec] = infra_jwt.get_token_codec
app.dependency_overrides[core_app_deps.get_token_cache] = get_token_cache
app.dependency_overrides[core_app_deps.get_password_hasher] = (
    infra_hasher.get_password_hasher
)
app.dependency_overrides[app_security.get_current_claims] = (
    infra_guard.get_current_claims
)
app.dependency_overrides[app_security.get_current_session_claims] = (
    infra_guard.get_current_session_claims
)
app.dependency_overrides[app_security.get_application_permission_resolver] = (
    apps_infra_deps.get_permission_resolver
)

# Users module
app.dependency_overrides[users_app_deps.get_user_repository] = (
    users_infra_deps.get_user_repository
)

# Applications module
app.dependency_overrides[apps_app_deps.get_application_repository] = (
    apps_infra_deps.get_application_repository
)
app.dependency_overrides[apps_app_deps.get_application_staff_repository] = (
    apps_infra_deps.get_application_staff_repository
)

# API Keys module
app.dependency_overrides[api_keys_app_deps.get_api_key_repository] = (
    api_keys_infra_deps.get_api_key_repository
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# CORS middleware
if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint.

    - healthy: 数据库与 Redis 均正常
    - degraded: 数据库正常但 Redis 异常（所有 token 校验失败）
    - unhealthy: 数据库异常
    """
    db_health_result = await check_db_health(context.engine)
    redis_health_result = await context.redis.health_check()

    db_ok = db_health_result.status == HealthStatus.OK
    redis_ok = redis_health_result.status == HealthStatus.OK

    if db_ok and redis_ok:
        overall_status = "healthy"
    elif db_ok:
        overall_status = "degraded"
    else:
        overall_status = "unhealthy"

    return {
        "status": overall_status,
        "environment": settings.ENVIRONMENT,
        "version": VERSION,
        "components": {
            "database": db_health_result.to_dict(),
            "redis": redis_health_result.to_dict(),
        },
    }


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to userv API",
        "docs": f"{settings.API_V1_STR}/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
