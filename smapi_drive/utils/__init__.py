"""
工具模块
"""
from .helpers import hash_code, strip_prefix

__all__ = [
    "hash_code",
    "strip_prefix",
]
