"""
SMAPI 操作 API 路由

每个 SMAPI 操作对应一个 POST 端点；同一组端点挂载在 /smapi 和 /smapi/appfolder 下，
后者只访问应用文件夹
"""
import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_smapi_service, use_app_folder
from app.api.schemas import (
    DeviceAuthTokenRequest,
    DeviceLinkCodeRequest,
    GetMetadataRequest,
    MediaRequest,
    SearchRequest,
    SmapiRequest,
)
from smapi_drive.service import SmapiService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["SMAPI"])


@router.post("/getMetadata")
async def get_metadata(
    body: GetMetadataRequest,
    app_folder: bool = Depends(use_app_folder),
    service: SmapiService = Depends(get_smapi_service)
):
    """浏览容器"""
    return await service.get_metadata(body.id, body.index, body.count, body.headers, app_folder)


@router.post("/search")
async def search(
    body: SearchRequest,
    service: SmapiService = Depends(get_smapi_service)
):
    """全文搜索"""
    return await service.search(body.id, body.term, body.index, body.count, body.headers)


@router.post("/getMediaMetadata")
async def get_media_metadata(
    body: MediaRequest,
    service: SmapiService = Depends(get_smapi_service)
):
    """单曲元数据"""
    return await service.get_media_metadata(body.id, body.headers)


@router.post("/getMediaURI")
async def get_media_uri(
    body: MediaRequest,
    service: SmapiService = Depends(get_smapi_service)
):
    """播放地址"""
    return await service.get_media_uri(body.id, body.headers)


@router.post("/getLastUpdate")
async def get_last_update(
    body: SmapiRequest,
    service: SmapiService = Depends(get_smapi_service)
):
    """目录最近更新时间"""
    return await service.get_last_update(body.headers)


@router.post("/getDeviceLinkCode")
async def get_device_link_code(
    body: DeviceLinkCodeRequest,
    app_folder: bool = Depends(use_app_folder),
    service: SmapiService = Depends(get_smapi_service)
):
    """申请关联码"""
    return await service.get_device_link_code(body.household_id, app_folder)


@router.post("/getDeviceAuthToken")
async def get_device_auth_token(
    body: DeviceAuthTokenRequest,
    service: SmapiService = Depends(get_smapi_service)
):
    """轮询关联结果"""
    return await service.get_device_auth_token(body.household_id, body.link_device_id)


@router.post("/refreshAuthToken")
async def refresh_auth_token(
    body: SmapiRequest,
    app_folder: bool = Depends(use_app_folder),
    service: SmapiService = Depends(get_smapi_service)
):
    """刷新令牌"""
    return await service.refresh_auth_token(body.headers, app_folder)
