"""
API 依赖注入模块
"""
from fastapi import Depends, Request

from app.core.config import Settings, get_settings
from smapi_drive.service import SmapiService

APPFOLDER_SEGMENT = "/appfolder/"


async def get_settings_dep() -> Settings:
    """获取配置依赖"""
    return get_settings()


async def get_smapi_service(settings: Settings = Depends(get_settings_dep)) -> SmapiService:
    """获取 SmapiService 依赖"""
    return SmapiService(settings.graph_config())


async def use_app_folder(request: Request) -> bool:
    """请求路径中带 /appfolder/ 时只访问应用文件夹"""
    return APPFOLDER_SEGMENT in request.url.path
