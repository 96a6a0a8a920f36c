"""
索引分页到续传令牌分页的转换

SMAPI 按索引请求分页（跳过前 N 项），Graph 只提供 @odata.nextLink 中的 $skiptoken。
非零索引需要先请求前 N 项，从返回的 nextLink 中取出续传令牌。
"""
import logging
import re
from typing import Optional
from urllib.parse import unquote

from .client import GraphClient

logger = logging.getLogger(__name__)

NEXT_LINK_FIELD = "@odata.nextLink"

_SKIP_TOKEN_RE = re.compile(r"skiptoken=([^&]+)", re.IGNORECASE)


def extract_skip_token(next_link: Optional[str]) -> Optional[str]:
    """从 nextLink URL 中提取 skiptoken 参数"""
    if not next_link:
        return None
    match = _SKIP_TOKEN_RE.search(next_link)
    if not match:
        return None
    return unquote(match.group(1))


async def resolve_skip_token(
    client: GraphClient,
    path: str,
    index: int,
    access_token: str
) -> Optional[str]:
    """获取从第 index 项开始的续传令牌

    index 为 0 时不发请求；没有 nextLink 时返回 None，调用方从头请求
    """
    if index <= 0:
        return None

    response = await client.get(path, access_token, count=index)
    skip_token = extract_skip_token(response.get(NEXT_LINK_FIELD))

    if skip_token is None:
        logger.debug(f"No next link for {path} at index {index}")

    return skip_token
