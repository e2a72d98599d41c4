"""Application API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from src.core.application.security import (
    ApplicationAccess,
    Principal,
    get_current_principal,
    require_app_permissions,
    require_staff_permissions,
)
from src.core.domain.permissions import AppStaffPermission, StaffPermission
from src.core.interfaces.http.response import ApiResponse, OffsetPage
from src.modules.applications.application.commands import (
    AddStaffCommand,
    CreateApplicationCommand,
    UpdateApplicationCommand,
    UpdateStaffCommand,
)
from src.modules.applications.application.dependencies import (
    get_add_staff_handler,
    get_application_query_service,
    get_create_application_handler,
    get_delete_application_handler,
    get_remove_staff_handler,
    get_update_application_handler,
    get_update_staff_handler,
)
from src.modules.applications.application.handlers import (
    AddStaffHandler,
    CreateApplicationHandler,
    DeleteApplicationHandler,
    RemoveStaffHandler,
    UpdateApplicationHandler,
    UpdateStaffHandler,
)
from src.modules.applications.application.queries import (
    ApplicationQuery,
    ApplicationStaffQuery,
)
from src.modules.applications.application.query_service import ApplicationQueryService
from src.modules.applications.interfaces.schemas import (
    AddStaffRequest,
    ApplicationResponse,
    CreateApplicationRequest,
    StaffResponse,
    UpdateApplicationRequest,
    UpdateStaffRequest,
)

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post(
    "",
    response_model=ApiResponse[ApplicationResponse],
    status_code=status.HTTP_201_CREATED,
    summary="创建应用",
    description="创建者自动获得该应用的全部权限",
)
async def create_application(
    request: CreateApplicationRequest,
    principal: Principal = Depends(
        require_staff_permissions(all_of=[StaffPermission.CREATE_APPLICATION])
    ),
    handler: CreateApplicationHandler = Depends(get_create_application_handler),
) -> ApiResponse[ApplicationResponse]:
    command = CreateApplicationCommand(
        creator_id=principal.user_id,
        name=request.name,
        description=request.description,
    )
    application = await handler.handle(command)
    return ApiResponse.success(
        data=ApplicationResponse.from_entity(application),
        code=status.HTTP_201_CREATED,
    )


@router.get(
    "",
    response_model=ApiResponse[OffsetPage[ApplicationResponse]],
    status_code=status.HTTP_200_OK,
    summary="应用列表",
    description="仅返回当前用户拥有 ReadApplication 权限的应用",
)
async def list_applications(
    query: Annotated[ApplicationQuery, Query()],
    principal: Principal = Depends(get_current_principal),
    service: ApplicationQueryService = Depends(get_application_query_service),
) -> ApiResponse[OffsetPage[ApplicationResponse]]:
    items, total, pagination = await service.list_readable(principal.user_id, query)
    page = OffsetPage.create(
        [ApplicationResponse.from_entity(a) for a in items], total, pagination
    )
    return ApiResponse.success(data=page)


@router.get(
    "/{application_id}",
    response_model=ApiResponse[ApplicationResponse],
    status_code=status.HTTP_200_OK,
    summary="获取应用详情",
)
async def get_application(
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.READ_APPLICATION])
    ),
    service: ApplicationQueryService = Depends(get_application_query_service),
) -> ApiResponse[ApplicationResponse]:
    application = await service.get_application(access.application_id)
    return ApiResponse.success(data=ApplicationResponse.from_entity(application))


@router.put(
    "/{application_id}",
    response_model=ApiResponse[ApplicationResponse],
    status_code=status.HTTP_200_OK,
    summary="更新应用",
)
async def update_application(
    request: UpdateApplicationRequest,
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.UPDATE_APPLICATION])
    ),
    handler: UpdateApplicationHandler = Depends(get_update_application_handler),
) -> ApiResponse[ApplicationResponse]:
    command = UpdateApplicationCommand(
        application_id=access.application_id,
        **request.model_dump(exclude_unset=True),
    )
    application = await handler.handle(command)
    return ApiResponse.success(data=ApplicationResponse.from_entity(application))


@router.delete(
    "/{application_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="删除应用",
    description="软删除应用及其全部员工授权",
)
async def delete_application(
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.DELETE_APPLICATION])
    ),
    handler: DeleteApplicationHandler = Depends(get_delete_application_handler),
) -> Response:
    await handler.handle(access.application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============ 应用员工 ============


@router.get(
    "/{application_id}/staff",
    response_model=ApiResponse[OffsetPage[StaffResponse]],
    status_code=status.HTTP_200_OK,
    summary="应用员工列表",
)
async def list_staff(
    query: Annotated[ApplicationStaffQuery, Query()],
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.READ_APPLICATION])
    ),
    service: ApplicationQueryService = Depends(get_application_query_service),
) -> ApiResponse[OffsetPage[StaffResponse]]:
    items, total, pagination = await service.list_staff(access.application_id, query)
    page = OffsetPage.create(
        [StaffResponse.from_entity(g) for g in items], total, pagination
    )
    return ApiResponse.success(data=page)


@router.post(
    "/{application_id}/staff",
    response_model=ApiResponse[StaffResponse],
    status_code=status.HTTP_201_CREATED,
    summary="添加应用员工",
)
async def add_staff(
    request: AddStaffRequest,
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.UPDATE_APPLICATION])
    ),
    handler: AddStaffHandler = Depends(get_add_staff_handler),
) -> ApiResponse[StaffResponse]:
    command = AddStaffCommand(
        application_id=access.application_id,
        user_id=request.user_id,
        permissions=request.permissions,
    )
    grant = await handler.handle(command)
    return ApiResponse.success(
        data=StaffResponse.from_entity(grant), code=status.HTTP_201_CREATED
    )


@router.put(
    "/{application_id}/staff/{user_id}",
    response_model=ApiResponse[StaffResponse],
    status_code=status.HTTP_200_OK,
    summary="更新应用员工权限",
)
async def update_staff(
    request: UpdateStaffRequest,
    user_id: str = Path(..., description="用户ID"),
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.UPDATE_APPLICATION])
    ),
    handler: UpdateStaffHandler = Depends(get_update_staff_handler),
) -> ApiResponse[StaffResponse]:
    command = UpdateStaffCommand(
        application_id=access.application_id,
        user_id=user_id,
        permissions=request.permissions,
    )
    grant = await handler.handle(command)
    return ApiResponse.success(data=StaffResponse.from_entity(grant))


@router.delete(
    "/{application_id}/staff/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="移除应用员工",
)
async def remove_staff(
    user_id: str = Path(..., description="用户ID"),
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.UPDATE_APPLICATION])
    ),
    handler: RemoveStaffHandler = Depends(get_remove_staff_handler),
) -> Response:
    await handler.handle(access.application_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
