"""API Key API routes.

Key 挂在应用之下，所有端点都要求调用者持有该应用的相应权限。
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from src.core.application.security import ApplicationAccess, require_app_permissions
from src.core.domain.permissions import AppStaffPermission
from src.core.interfaces.http.response import ApiResponse, OffsetPage
from src.modules.api_keys.application.dependencies import get_api_key_service
from src.modules.api_keys.application.queries import KeyQuery
from src.modules.api_keys.application.service import ApiKeyService
from src.modules.api_keys.interfaces.schemas import (
    ApiKeyDetailResponse,
    ApiKeyResponse,
    CreateApiKeyRequest,
    UpdateApiKeyRequest,
)

router = APIRouter(prefix="/applications/{application_id}/keys", tags=["api-keys"])


@router.post(
    "",
    response_model=ApiResponse[ApiKeyDetailResponse],
    status_code=status.HTTP_201_CREATED,
    summary="创建 API Key",
)
async def create_api_key(
    request: CreateApiKeyRequest,
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.CREATE_KEY])
    ),
    service: ApiKeyService = Depends(get_api_key_service),
) -> ApiResponse[ApiKeyDetailResponse]:
    api_key = await service.create_key(
        application_id=access.application_id,
        created_by=access.principal.user_id,
        lifetime=request.lifetime,
        user_id=request.user_id,
        activate=request.activate,
    )
    return ApiResponse.success(
        data=ApiKeyDetailResponse.from_entity(api_key),
        message="API Key created successfully",
        code=status.HTTP_201_CREATED,
    )


@router.get(
    "",
    response_model=ApiResponse[OffsetPage[ApiKeyResponse]],
    summary="列出 API Keys",
    description="列表不返回 key 明文",
)
async def list_api_keys(
    query: Annotated[KeyQuery, Query()],
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.READ_KEY])
    ),
    service: ApiKeyService = Depends(get_api_key_service),
) -> ApiResponse[OffsetPage[ApiKeyResponse]]:
    items, total, pagination = await service.list_keys(access.application_id, query)
    page = OffsetPage.create(
        [ApiKeyResponse.from_entity(k) for k in items], total, pagination
    )
    return ApiResponse.success(data=page)


@router.get(
    "/{key_id}",
    response_model=ApiResponse[ApiKeyDetailResponse],
    summary="获取 API Key 详情",
)
async def get_api_key(
    key_id: str = Path(..., description="Key ID"),
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.READ_KEY_DETAIL])
    ),
    service: ApiKeyService = Depends(get_api_key_service),
) -> ApiResponse[ApiKeyDetailResponse]:
    api_key = await service.get_key(access.application_id, key_id)
    return ApiResponse.success(data=ApiKeyDetailResponse.from_entity(api_key))


@router.put(
    "/{key_id}",
    response_model=ApiResponse[ApiKeyResponse],
    summary="更新 API Key",
)
async def update_api_key(
    request: UpdateApiKeyRequest,
    key_id: str = Path(..., description="Key ID"),
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.UPDATE_KEY])
    ),
    service: ApiKeyService = Depends(get_api_key_service),
) -> ApiResponse[ApiKeyResponse]:
    api_key = await service.update_key(
        application_id=access.application_id,
        key_id=key_id,
        lifetime=request.lifetime,
        is_banned=request.is_banned,
        activated=request.activated,
    )
    return ApiResponse.success(data=ApiKeyResponse.from_entity(api_key))


@router.delete(
    "/{key_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="删除 API Key",
)
async def delete_api_key(
    key_id: str = Path(..., description="Key ID"),
    access: ApplicationAccess = Depends(
        require_app_permissions(all_of=[AppStaffPermission.DELETE_KEY])
    ),
    service: ApiKeyService = Depends(get_api_key_service),
) -> Response:
    await service.delete_key(access.application_id, key_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
