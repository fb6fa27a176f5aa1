# -*- coding: utf-8 -*-
"""
半结构化文档访问工具
对解码后的JSON对象做安全的按名取值，缺失或类型不符时返回None而不是抛异常
"""

from typing import Any, Dict, List, Optional


def as_dict(value: Any) -> Optional[Dict[str, Any]]:
    """value是对象时原样返回，否则None"""
    return value if isinstance(value, dict) else None


def as_list(value: Any) -> Optional[List[Any]]:
    """value是数组时原样返回，否则None"""
    return value if isinstance(value, list) else None


def as_str(value: Any) -> Optional[str]:
    """value是字符串时原样返回，否则None"""
    return value if isinstance(value, str) else None


def get_path(obj: Any, *keys: str) -> Any:
    """
    沿键路径逐层取值

    Args:
        obj: 根对象
        *keys: 键路径，如 ("metadata", "name")

    Returns:
        Any: 取到的值；任一层不是对象或键不存在时返回None
    """
    current = obj
    for key in keys:
        current = as_dict(current)
        if current is None or key not in current:
            return None
        current = current[key]
    return current


def get_str(obj: Any, *keys: str) -> Optional[str]:
    """按路径取字符串"""
    return as_str(get_path(obj, *keys))


def get_non_empty_str(obj: Any, *keys: str) -> Optional[str]:
    """按路径取非空字符串，空串视为缺失"""
    value = get_str(obj, *keys)
    return value or None
