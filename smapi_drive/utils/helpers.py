"""
辅助工具模块
"""
from typing import Optional


def hash_code(value: Optional[str]) -> int:
    """计算字符串的 32 位有符号哈希

    与 Java String.hashCode 相同的算法，仅用于在日志中代替家庭 ID
    """
    h = 0
    for char in value or "":
        h = (31 * h + ord(char)) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def strip_prefix(item_id: str, prefix: str) -> str:
    """去掉 "prefix:" 形式的类型前缀"""
    marker = f"{prefix}:"
    if item_id.startswith(marker):
        return item_id[len(marker):]
    return item_id
