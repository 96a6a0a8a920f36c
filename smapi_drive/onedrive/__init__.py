"""
OneDrive (Microsoft Graph) Provider
"""
from .auth import DeviceLinkAuth
from .client import GraphClient
from .codec import compact_token, compress_token, decompress_token
from .config import GraphConfig, default_config
from .models import parse_item, parse_items
from .pagination import extract_skip_token, resolve_skip_token
from .translator import CatalogTranslator

__all__ = [
    "DeviceLinkAuth",
    "GraphClient",
    "compact_token",
    "compress_token",
    "decompress_token",
    "GraphConfig",
    "default_config",
    "parse_item",
    "parse_items",
    "extract_skip_token",
    "resolve_skip_token",
    "CatalogTranslator",
]
