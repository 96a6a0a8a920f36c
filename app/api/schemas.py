"""
API 数据模型 (Pydantic)

字段名沿用 SMAPI 参数名，headers 对应 SOAP 头（credentials.loginToken）
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


# ==================== 通用请求 ====================

class SmapiRequest(BaseModel):
    """带凭证头的请求"""
    headers: Optional[Dict[str, Any]] = Field(None, description="SMAPI 头，包含 credentials.loginToken")


# ==================== 浏览相关 ====================

class GetMetadataRequest(SmapiRequest):
    """getMetadata 请求"""
    id: str = Field(..., description="容器 ID（root / folder:<id> / search）")
    index: int = Field(default=0, ge=0, description="起始索引")
    count: int = Field(default=100, ge=1, description="请求条目数")


class SearchRequest(SmapiRequest):
    """search 请求"""
    id: str = Field(default="files", description="搜索分类")
    term: str = Field(..., min_length=1, description="搜索词")
    index: int = Field(default=0, ge=0)
    count: int = Field(default=100, ge=1)


class MediaRequest(SmapiRequest):
    """getMediaMetadata / getMediaURI 请求"""
    id: str = Field(..., description="条目 ID")


# ==================== 账号关联 ====================

class DeviceLinkCodeRequest(BaseModel):
    """getDeviceLinkCode 请求"""
    household_id: str = Field(..., alias="householdId")


class DeviceAuthTokenRequest(BaseModel):
    """getDeviceAuthToken 请求"""
    household_id: str = Field(..., alias="householdId")
    link_code: Optional[str] = Field(None, alias="linkCode")
    link_device_id: str = Field(..., alias="linkDeviceId")
