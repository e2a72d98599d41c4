"""User API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from src.core.application.security import (
    Principal,
    get_current_principal,
    require_staff_permissions,
)
from src.core.domain.permissions import StaffPermission
from src.core.interfaces.http.response import ApiResponse, OffsetPage
from src.modules.users.application.commands import (
    ChangePasswordCommand,
    CreateStaffUserCommand,
    DeleteUserCommand,
    UpdateStaffUserCommand,
)
from src.modules.users.application.dependencies import (
    get_change_password_handler,
    get_create_staff_user_handler,
    get_delete_user_handler,
    get_update_staff_user_handler,
    get_user_query_service,
)
from src.modules.users.application.handlers import (
    ChangePasswordHandler,
    CreateStaffUserHandler,
    DeleteUserHandler,
    UpdateStaffUserHandler,
)
from src.modules.users.application.queries import UserQuery
from src.modules.users.application.query_service import UserQueryService
from src.modules.users.interfaces.schemas import (
    ChangePasswordRequest,
    CreatedStaffUserResponse,
    CreateStaffUserRequest,
    UpdateStaffUserRequest,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["users"])

# 任意平台员工即可访问
require_staff = require_staff_permissions()


async def _list_users(
    query: UserQuery, is_staff: bool, service: UserQueryService
) -> ApiResponse[OffsetPage[UserResponse]]:
    users, total, pagination = await service.list_users(query, is_staff=is_staff)
    page = OffsetPage.create(
        [UserResponse.from_entity(u) for u in users], total, pagination
    )
    return ApiResponse.success(data=page)


@router.get(
    "",
    response_model=ApiResponse[OffsetPage[UserResponse]],
    status_code=status.HTTP_200_OK,
    summary="用户列表",
    description="平台员工查询普通用户",
)
async def list_users(
    query: Annotated[UserQuery, Query()],
    _principal: Principal = Depends(require_staff),
    service: UserQueryService = Depends(get_user_query_service),
) -> ApiResponse[OffsetPage[UserResponse]]:
    return await _list_users(query, False, service)


@router.get(
    "/staff",
    response_model=ApiResponse[OffsetPage[UserResponse]],
    status_code=status.HTTP_200_OK,
    summary="员工列表",
    description="平台员工查询员工账号",
)
async def list_staff_users(
    query: Annotated[UserQuery, Query()],
    _principal: Principal = Depends(require_staff),
    service: UserQueryService = Depends(get_user_query_service),
) -> ApiResponse[OffsetPage[UserResponse]]:
    return await _list_users(query, True, service)


@router.post(
    "/staff",
    response_model=ApiResponse[CreatedStaffUserResponse],
    status_code=status.HTTP_201_CREATED,
    summary="创建员工账号",
    description="生成随机初始密码，仅在本次响应中返回",
)
async def create_staff_user(
    request: CreateStaffUserRequest,
    _principal: Principal = Depends(
        require_staff_permissions(all_of=[StaffPermission.CREATE_STAFF_USER])
    ),
    handler: CreateStaffUserHandler = Depends(get_create_staff_user_handler),
) -> ApiResponse[CreatedStaffUserResponse]:
    command = CreateStaffUserCommand(**request.model_dump())
    user, password = await handler.handle(command)
    response = CreatedStaffUserResponse(
        user=UserResponse.from_entity(user), password=password
    )
    return ApiResponse.success(data=response, code=status.HTTP_201_CREATED)


@router.put(
    "/staff/{user_id}",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_200_OK,
    summary="更新员工账号",
)
async def update_staff_user(
    request: UpdateStaffUserRequest,
    user_id: str = Path(..., description="用户ID"),
    _principal: Principal = Depends(
        require_staff_permissions(all_of=[StaffPermission.UPDATE_STAFF_USER])
    ),
    handler: UpdateStaffUserHandler = Depends(get_update_staff_user_handler),
) -> ApiResponse[UserResponse]:
    command = UpdateStaffUserCommand(
        user_id=user_id, **request.model_dump(exclude_unset=True)
    )
    user = await handler.handle(command)
    return ApiResponse.success(data=UserResponse.from_entity(user))


@router.delete(
    "/staff/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="删除员工账号",
)
async def delete_staff_user(
    user_id: str = Path(..., description="用户ID"),
    _principal: Principal = Depends(
        require_staff_permissions(all_of=[StaffPermission.DELETE_STAFF_USER])
    ),
    handler: DeleteUserHandler = Depends(get_delete_user_handler),
) -> Response:
    await handler.handle(DeleteUserCommand(user_id=user_id, is_staff=True))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_200_OK,
    summary="获取当前用户信息",
)
async def get_me(
    principal: Principal = Depends(get_current_principal),
    service: UserQueryService = Depends(get_user_query_service),
) -> ApiResponse[UserResponse]:
    user = await service.get_user(principal.user_id)
    return ApiResponse.success(data=UserResponse.from_entity(user))


@router.post(
    "/me/password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="修改密码",
    description="修改成功后撤销该用户的全部会话",
)
async def change_password(
    request: ChangePasswordRequest,
    principal: Principal = Depends(get_current_principal),
    handler: ChangePasswordHandler = Depends(get_change_password_handler),
) -> Response:
    command = ChangePasswordCommand(
        user_id=principal.user_id,
        old_password=request.old_password,
        new_password=request.new_password,
    )
    await handler.handle(command)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="删除用户",
)
async def delete_user(
    user_id: str = Path(..., description="用户ID"),
    _principal: Principal = Depends(
        require_staff_permissions(all_of=[StaffPermission.DELETE_USER])
    ),
    handler: DeleteUserHandler = Depends(get_delete_user_handler),
) -> Response:
    await handler.handle(DeleteUserCommand(user_id=user_id, is_staff=False))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
