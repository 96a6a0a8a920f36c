"""
访问令牌压缩

SMAPI 的 token 字段最多 2048 个字符，部分 Graph 访问令牌超出该长度。
JWT 的 header 和 payload 是 base64 编码的 JSON，解码回原文即可明显缩短，
signature 段保持不变。
"""
import base64
import binascii
import logging

from ..core.exceptions import MalformedTokenError
from .config import default_config

logger = logging.getLogger(__name__)

SEPARATOR = "###"


def compress_token(token: str, max_length: int = None) -> str:
    """header.payload.signature -> header###payload###signature

    Raises:
        MalformedTokenError: 令牌不是三段结构或无法解码
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedTokenError(f"Expected 3 token segments, got {len(parts)}")

    header, payload, signature = parts
    compressed = SEPARATOR.join((_b64decode(header), _b64decode(payload), signature))

    max_length = max_length or default_config.TOKEN_MAX_LENGTH
    if len(compressed) > max_length:
        logger.error(f"Compressed token still too long: {len(compressed)}")

    return compressed


def decompress_token(value: str) -> str:
    """还原压缩过的令牌，未压缩的令牌原样返回"""
    if not value.startswith("{") or SEPARATOR not in value:
        return value

    parts = value.split(SEPARATOR)
    if len(parts) != 3:
        return value

    header, payload, signature = parts
    # 压缩格式不记录字母表，按 signature 段推断
    urlsafe = "-" in signature or "_" in signature
    return ".".join((_b64encode(header, urlsafe), _b64encode(payload, urlsafe), signature))


def compact_token(token: str, max_length: int = None) -> str:
    """仅在令牌超过存储上限时压缩"""
    max_length = max_length or default_config.TOKEN_MAX_LENGTH
    if len(token) <= max_length:
        return token

    logger.info(f"Access token too long ({len(token)}), compressing")
    return compress_token(token, max_length)


def _b64decode(segment: str) -> str:
    # 同时接受 base64url 和标准字母表，补齐被省略的填充
    normalized = segment.replace("+", "-").replace("/", "_")
    normalized += "=" * (-len(normalized) % 4)
    try:
        return base64.urlsafe_b64decode(normalized).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise MalformedTokenError(f"Token segment is not base64 encoded text: {e}") from e


def _b64encode(text: str, urlsafe: bool) -> str:
    encode = base64.urlsafe_b64encode if urlsafe else base64.b64encode
    return encode(text.encode("utf-8")).rstrip(b"=").decode("ascii")
