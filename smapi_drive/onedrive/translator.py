"""
目录转换器

将 OneDrive 的文件/文件夹模型映射为 SMAPI 的浏览集合与媒体元数据
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from ..core.exceptions import ItemNotFoundError, UpstreamError
from ..core.models import (
    CatalogItem,
    CredentialBundle,
    FileType,
    ItemType,
    MediaCollectionEntry,
    MediaMetadata,
    PageResult,
)
from ..utils.helpers import strip_prefix
from .client import GraphClient
from .models import parse_item, parse_items
from .pagination import resolve_skip_token

logger = logging.getLogger(__name__)

ROOT_ID = "root"
COUNT_FIELD = "@odata.count"


def is_playable(item: CatalogItem) -> bool:
    """音频条目，或按扩展名 / MIME 类型判断为音频的普通文件"""
    if item.type == FileType.AUDIO:
        return True
    if item.type != FileType.FILE:
        return False
    if (item.name or "").endswith(".flac"):
        return True
    return "audio" in (item.mime_type or "")


def normalize_mime_type(item: CatalogItem) -> Optional[str]:
    """修正 Sonos 无法识别的 MIME 类型"""
    if item.type == FileType.FILE and (item.name or "").endswith(".flac"):
        return "audio/flac"
    mime_type = getattr(item, "mime_type", None)
    if mime_type and mime_type.endswith("wma"):
        return "audio/wma"
    return mime_type


class CatalogTranslator:
    """OneDrive 目录到 SMAPI 的转换器"""

    def __init__(self, client: GraphClient):
        self.client = client
        self.config = client.config

    # ==================== 路径解析 ====================

    def resolve_container_path(self, container_id: str, use_app_folder: bool = False) -> Optional[str]:
        """容器 ID -> children 路径，无法识别的 ID 返回 None"""
        if container_id == ROOT_ID:
            root = self.config.DRIVE_APPFOLDER if use_app_folder else self.config.DRIVE_ROOT
            return f"{root}/children"

        if container_id.startswith(f"{FileType.FOLDER.value}:"):
            folder_id = strip_prefix(container_id, FileType.FOLDER.value)
            if folder_id:
                return f"{self.config.DRIVE_ITEMS}/{folder_id}/children"

        return None

    def search_path(self, term: str) -> str:
        escaped = quote(term.replace("'", "''"), safe="")
        return f"{self.config.DRIVE_ROOT}/search(q='{escaped}')"

    # ==================== 浏览 ====================

    async def list_children(
        self,
        container_id: str,
        count: int,
        index: int,
        credentials: CredentialBundle,
        use_app_folder: bool = False
    ) -> Optional[PageResult]:
        """列出容器内容"""
        logger.debug(f"list_children id:{container_id} count:{count} index:{index}")

        path = self.resolve_container_path(container_id, use_app_folder)
        if path is None:
            return None

        return await self._fetch_page(path, count, index, credentials)

    async def search(
        self,
        term: str,
        count: int,
        index: int,
        credentials: CredentialBundle
    ) -> PageResult:
        """全文搜索"""
        logger.debug(f"search count:{count} index:{index}")
        return await self._fetch_page(self.search_path(term), count, index, credentials)

    async def _fetch_page(
        self,
        path: str,
        count: int,
        index: int,
        credentials: CredentialBundle
    ) -> PageResult:
        skip_token = await resolve_skip_token(self.client, path, index, credentials.access_token)
        response = await self.client.get(
            path, credentials.access_token, count=count, skip_token=skip_token
        )
        return self.build_page(response)

    def build_page(self, response: Dict[str, Any]) -> PageResult:
        """将列表响应转换为分页结果"""
        entries = [self.build_collection_entry(item) for item in parse_items(response.get("value") or [])]

        total = response.get(COUNT_FIELD)
        return PageResult(
            items=entries,
            count=len(entries),
            total=total if total is not None else len(entries),
        )

    def build_collection_entry(self, item: CatalogItem) -> MediaCollectionEntry:
        """目录条目 -> 浏览集合条目"""
        if is_playable(item):
            return MediaCollectionEntry(
                id=f"{FileType.AUDIO.value}:{item.id}",
                item_type=ItemType.TRACK,
                title=getattr(item, "title", None) or item.name,
                can_play=True,
                can_enumerate=False,
                artist=getattr(item, "artist", None),
                album_art_uri=item.thumbnail_uri,
            )

        if item.type == FileType.FOLDER:
            return MediaCollectionEntry(
                id=f"{FileType.FOLDER.value}:{item.id}",
                item_type=ItemType.COLLECTION,
                title=item.name,
                can_play=item.child_count < self.config.CAN_PLAY_COUNT,
                can_enumerate=True,
            )

        return MediaCollectionEntry(
            id=f"{FileType.FILE.value}:{item.id}",
            item_type=ItemType.OTHER,
            title=item.name,
            can_play=False,
            can_enumerate=False,
        )

    # ==================== 单项查询 ====================

    async def get_item(self, item_id: str, credentials: CredentialBundle) -> CatalogItem:
        """按 ID 获取条目

        Raises:
            ItemNotFoundError: ID 格式错误、不存在或无法识别类型
        """
        raw_id = _strip_item_prefix(item_id)
        if not raw_id or any(c in raw_id for c in "/:?#") or raw_id.strip() != raw_id:
            raise ItemNotFoundError(f"Malformed item id: {item_id}")

        try:
            response = await self.client.get(f"{self.config.DRIVE_ITEMS}/{raw_id}", credentials.access_token)
        except UpstreamError as e:
            if e.status_code in (400, 404):
                raise ItemNotFoundError(f"Item not found: {item_id}") from e
            raise

        item = parse_item(response)
        if item is None:
            raise ItemNotFoundError(f"Item has no usable type: {item_id}")
        return item

    async def get_track_metadata(self, item_id: str, credentials: CredentialBundle) -> MediaMetadata:
        """获取单曲元数据"""
        item = await self.get_item(item_id, credentials)
        if item.type == FileType.FOLDER:
            raise ItemNotFoundError(f"Item is a folder: {item_id}")
        return self.build_media_metadata(item)

    def build_media_metadata(self, item: CatalogItem) -> MediaMetadata:
        return MediaMetadata(
            id=f"{FileType.AUDIO.value}:{item.id}",
            mime_type=normalize_mime_type(item),
            title=getattr(item, "title", None) or item.name,
            artist=getattr(item, "artist", None),
            album=getattr(item, "album", None),
            duration=getattr(item, "duration", 0),
            album_art_uri=item.thumbnail_uri,
            track_number=getattr(item, "track_number", 1),
        )

    async def get_media_uri(self, item_id: str, credentials: CredentialBundle) -> str:
        """获取下载地址"""
        item = await self.get_item(item_id, credentials)
        download_uri = getattr(item, "download_uri", None)
        if not download_uri:
            raise ItemNotFoundError(f"Item has no download url: {item_id}")
        return download_uri

    async def get_last_update(self, credentials: CredentialBundle) -> Optional[str]:
        """通过 delta 接口获取最近修改时间"""
        response = await self.client.get(f"{self.config.DRIVE_ROOT}/delta", credentials.access_token)
        values = response.get("value") or []
        if values:
            return values[0].get("lastModifiedDateTime")
        return None


def _strip_item_prefix(item_id: str) -> str:
    for file_type in (FileType.AUDIO, FileType.FILE):
        stripped = strip_prefix(item_id, file_type.value)
        if stripped != item_id:
            return stripped
    return item_id
