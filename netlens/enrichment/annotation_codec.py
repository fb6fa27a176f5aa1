# -*- coding: utf-8 -*-
"""
网络状态注解编解码
注解值为JSON数组，每个元素描述Pod的一个网络接口
"""

import json
import logging
from typing import Any, Dict, List, Optional

NETWORK_STATUS_ANNOTATION = "k8s.v1.cni.cncf.io/network-status"

logger = logging.getLogger("netlens.annotation_codec")


def decode_network_status(value: Any) -> Optional[List[Dict[str, Any]]]:
    """
    解码网络状态注解

    Args:
        value: 注解原始值

    Returns:
        Optional[List[Dict]]: 接口描述列表；内容不是对象数组时返回None，调用方跳过该Pod
    """
    if not isinstance(value, str):
        return None

    try:
        networks = json.loads(value)
    except ValueError as e:
        logger.debug("网络状态注解不是合法JSON: %s", e)
        return None

    if not isinstance(networks, list):
        return None
    if not all(isinstance(network, dict) for network in networks):
        return None

    return networks


def encode_network_status(networks: List[Dict[str, Any]]) -> str:
    """
    编码网络状态注解

    输出紧凑JSON且按键排序，非ASCII字符原样保留；NaN/Infinity等非标准数值会抛出ValueError
    """
    return json.dumps(
        networks,
        separators=(",", ":"),
        sort_keys=True,
        allow_nan=False,
        ensure_ascii=False,
    )
