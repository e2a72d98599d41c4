"""Auth API routes.

登录与 introspect 返回 OAuth2 惯用的裸 JSON，不使用 ApiResponse 包装。
"""

from fastapi import APIRouter, Depends, Response, status

from src.core.application.security import (
    Principal,
    get_current_principal,
    get_current_session_claims,
)
from src.core.domain.tokens import TokenClaims
from src.core.interfaces.http.response import ApiResponse
from src.modules.auth.application.commands import (
    IntrospectCommand,
    LoginCommand,
    RegisterCommand,
)
from src.modules.auth.application.dependencies import (
    get_introspect_handler,
    get_login_handler,
    get_logout_all_handler,
    get_logout_handler,
    get_register_handler,
)
from src.modules.auth.application.handlers import (
    IntrospectHandler,
    LoginHandler,
    LogoutAllHandler,
    LogoutHandler,
    RegisterHandler,
)
from src.modules.auth.interfaces.schemas import (
    IntrospectRequest,
    IntrospectResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)
from src.modules.users.interfaces.schemas import UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="注册",
)
async def register(
    request: RegisterRequest,
    handler: RegisterHandler = Depends(get_register_handler),
) -> ApiResponse[UserResponse]:
    command = RegisterCommand(**request.model_dump())
    user = await handler.handle(command)
    return ApiResponse.success(
        data=UserResponse.from_entity(user), code=status.HTTP_201_CREATED
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="密码登录",
    description="签发 access / refresh token 对",
)
async def login(
    request: LoginRequest,
    handler: LoginHandler = Depends(get_login_handler),
) -> TokenResponse:
    tokens = await handler.handle(
        LoginCommand(email=request.email, password=request.password)
    )
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        expires_in=tokens.expires_in,
    )


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="退出登录",
    description="撤销当前 token 及其配对 token（access 或 refresh 均可）",
)
async def logout(
    claims: TokenClaims = Depends(get_current_session_claims),
    handler: LogoutHandler = Depends(get_logout_handler),
) -> Response:
    await handler.handle(claims)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/logout_all",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="退出全部会话",
)
async def logout_all(
    principal: Principal = Depends(get_current_principal),
    handler: LogoutAllHandler = Depends(get_logout_all_handler),
) -> Response:
    await handler.handle(principal.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/introspect",
    response_model=IntrospectResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Token introspection",
)
async def introspect(
    request: IntrospectRequest,
    handler: IntrospectHandler = Depends(get_introspect_handler),
) -> IntrospectResponse:
    result = await handler.handle(
        IntrospectCommand(token=request.token, token_type_hint=request.token_type_hint)
    )
    return IntrospectResponse(**result.model_dump())
