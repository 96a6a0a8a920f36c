"""
OneDrive 数据模型转换器

将 Graph API 返回的 driveItem 转换为统一的目录条目
"""
import logging
from typing import Dict, List, Optional

from ..core.models import AudioTrack, CatalogItem, FileItem, FolderItem

logger = logging.getLogger(__name__)

DOWNLOAD_URL_FIELD = "@microsoft.graph.downloadUrl"


def parse_item(raw: Dict) -> Optional[CatalogItem]:
    """将 driveItem 转换为目录条目

    Args:
        raw: Graph API 返回的 driveItem

    Returns:
        FileItem / AudioTrack / FolderItem；既没有 file 也没有 folder 时返回 None
    """
    file_facet = raw.get("file")
    folder_facet = raw.get("folder")

    if file_facet is None and folder_facet is None:
        return None

    item_id = raw.get("id")
    name = raw.get("name")
    parent_id = (raw.get("parentReference") or {}).get("id")

    if file_facet is not None:
        common = dict(
            id=item_id,
            name=name,
            mime_type=file_facet.get("mimeType"),
            download_uri=raw.get(DOWNLOAD_URL_FIELD),
            thumbnail_uri=_first_thumbnail(raw.get("thumbnails")),
            parent_id=parent_id,
        )
        audio = raw.get("audio")
        if audio is None:
            return FileItem(**common)

        return AudioTrack(
            title=audio.get("title"),
            artist=audio.get("artist"),
            album=audio.get("album"),
            duration=int(audio.get("duration") or 0) // 1000,
            track_number=audio.get("track") or 1,
            **common
        )

    return FolderItem(
        id=item_id,
        name=name,
        child_count=folder_facet.get("childCount") or 0,
        parent_id=parent_id,
    )


def parse_items(raw_items: List[Dict]) -> List[CatalogItem]:
    """批量转换，丢弃无法识别类型的记录"""
    items = []
    for raw in raw_items:
        item = parse_item(raw)
        if item is None:
            logger.debug(f"Ignoring item with no type: {raw.get('name')}")
            continue
        items.append(item)
    return items


def _first_thumbnail(thumbnails: Optional[List[Dict]]) -> Optional[str]:
    """取第一组缩略图的 small 尺寸地址"""
    if not thumbnails:
        return None
    small = thumbnails[0].get("small") or {}
    return small.get("url")
