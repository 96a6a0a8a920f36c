"""
Sonos SMAPI - OneDrive 网关

将 Sonos 音乐服务协议的浏览/播放/账号关联调用转换为 Microsoft Graph 调用
"""

# 导出核心数据模型和异常
from .core import (
    FileType,
    ItemType,
    CredentialBundle,
    FileItem,
    AudioTrack,
    FolderItem,
    CatalogItem,
    MediaCollectionEntry,
    MediaMetadata,
    PageResult,
    DeviceLinkCode,
    DeviceAuthToken,
    SmapiError,
    SessionInvalidError,
    TokenRefreshRequiredError,
    LinkPendingError,
    LinkFailedError,
    MalformedTokenError,
    ItemNotFoundError,
    UpstreamError,
)

# 导出 OneDrive Provider
from .onedrive import (
    CatalogTranslator,
    DeviceLinkAuth,
    GraphClient,
    GraphConfig,
    compress_token,
    decompress_token,
    parse_item,
)

# 导出操作处理
from .service import SmapiService, credentials_from_headers

__all__ = [
    # 核心
    "FileType",
    "ItemType",
    "CredentialBundle",
    "FileItem",
    "AudioTrack",
    "FolderItem",
    "CatalogItem",
    "MediaCollectionEntry",
    "MediaMetadata",
    "PageResult",
    "DeviceLinkCode",
    "DeviceAuthToken",
    "SmapiError",
    "SessionInvalidError",
    "TokenRefreshRequiredError",
    "LinkPendingError",
    "LinkFailedError",
    "MalformedTokenError",
    "ItemNotFoundError",
    "UpstreamError",
    # OneDrive
    "CatalogTranslator",
    "DeviceLinkAuth",
    "GraphClient",
    "GraphConfig",
    "compress_token",
    "decompress_token",
    "parse_item",
    # 服务
    "SmapiService",
    "credentials_from_headers",
]

__version__ = "1.0.0"
