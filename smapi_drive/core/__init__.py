"""
核心抽象层

导出数据模型和异常
"""

from .models import (
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
)

from .exceptions import (
    SmapiError,
    SessionInvalidError,
    TokenRefreshRequiredError,
    LinkPendingError,
    LinkFailedError,
    MalformedTokenError,
    ItemNotFoundError,
    UpstreamError,
)

__all__ = [
    # 模型
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
    # 异常
    "SmapiError",
    "SessionInvalidError",
    "TokenRefreshRequiredError",
    "LinkPendingError",
    "LinkFailedError",
    "MalformedTokenError",
    "ItemNotFoundError",
    "UpstreamError",
]
