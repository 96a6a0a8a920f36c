"""
通用数据模型

定义目录条目、凭证以及面向 SMAPI 协议的输出结构
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union


class FileType(Enum):
    """目录条目类型"""
    FILE = "file"
    AUDIO = "audio"
    FOLDER = "folder"


class ItemType(Enum):
    """协议侧条目类型"""
    TRACK = "track"
    OTHER = "other"
    COLLECTION = "collection"
    SEARCH = "search"


@dataclass(frozen=True)
class CredentialBundle:
    """单次请求携带的凭证，不做持久化"""
    household_id: Optional[str] = None   # 家庭 ID（不透明）
    access_token: Optional[str] = None   # 访问令牌（可能是压缩形式）
    refresh_token: Optional[str] = None  # 刷新令牌


@dataclass
class FileItem:
    """普通文件"""
    type: ClassVar[FileType] = FileType.FILE

    id: str
    name: Optional[str]
    mime_type: Optional[str] = None
    download_uri: Optional[str] = None   # 预签名下载地址
    thumbnail_uri: Optional[str] = None  # 小尺寸缩略图
    parent_id: Optional[str] = None


@dataclass
class AudioTrack(FileItem):
    """带音频元数据的文件"""
    type: ClassVar[FileType] = FileType.AUDIO

    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    duration: int = 0                    # 秒
    track_number: int = 1


@dataclass
class FolderItem:
    """文件夹"""
    type: ClassVar[FileType] = FileType.FOLDER

    id: str
    name: Optional[str]
    child_count: int = 0
    parent_id: Optional[str] = None


CatalogItem = Union[FileItem, AudioTrack, FolderItem]


@dataclass
class MediaCollectionEntry:
    """浏览列表中的一项"""
    id: str                              # 带类型前缀的 ID
    item_type: ItemType
    title: Optional[str]
    can_play: bool
    can_enumerate: bool
    artist: Optional[str] = None
    album_art_uri: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "itemType": self.item_type.value,
            "title": self.title,
            "canPlay": self.can_play,
            "canEnumerate": self.can_enumerate,
        }
        if self.artist is not None:
            data["artist"] = self.artist
        if self.album_art_uri is not None:
            data["albumArtURI"] = self.album_art_uri
        return data


@dataclass
class MediaMetadata:
    """单曲元数据"""
    id: str
    mime_type: Optional[str]
    title: Optional[str]
    artist: Optional[str] = None
    album: Optional[str] = None
    duration: int = 0
    album_art_uri: Optional[str] = None
    track_number: int = 1

    def to_dict(self) -> Dict[str, Any]:
        track_metadata = {
            "duration": self.duration,
            "trackNumber": self.track_number,
        }
        for key, value in (
            ("artist", self.artist),
            ("album", self.album),
            ("albumArtURI", self.album_art_uri),
        ):
            if value is not None:
                track_metadata[key] = value

        return {
            "id": self.id,
            "itemType": ItemType.TRACK.value,
            "mimeType": self.mime_type,
            "title": self.title,
            "trackMetadata": track_metadata,
        }


@dataclass
class PageResult:
    """分页结果"""
    items: List[Union[MediaCollectionEntry, MediaMetadata]] = field(default_factory=list)
    count: int = 0
    total: int = 0

    def to_dict(self, index: int) -> Dict[str, Any]:
        return {
            "index": index,
            "count": self.count,
            "total": self.total,
            "mediaCollection": [item.to_dict() for item in self.items],
        }


@dataclass
class DeviceLinkCode:
    """设备码认证信息"""
    user_code: str                       # 展示给用户的验证码
    verification_uri: str                # 用户打开的验证地址
    device_code: str                     # 轮询时回传的设备码

    # 扩展字段
    raw_data: Optional[Dict[str, Any]] = None


@dataclass
class DeviceAuthToken:
    """设备码换取的令牌"""
    access_token: str
    refresh_token: Optional[str] = None

    # 扩展字段
    raw_data: Optional[Dict[str, Any]] = None
