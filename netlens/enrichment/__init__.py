# -*- coding: utf-8 -*-
"""
Pod网络状态增强模块
"""

from .annotation_codec import (
    NETWORK_STATUS_ANNOTATION,
    decode_network_status,
    encode_network_status,
)
from .pipeline import enrich_pod, enrich_pod_list, load_instance_snapshot
from .vmi_lookup import build_mac_to_ip_mapping, find_instance, resolve_owner_vmi_name

__all__ = [
    "NETWORK_STATUS_ANNOTATION",
    "decode_network_status",
    "encode_network_status",
    "enrich_pod",
    "enrich_pod_list",
    "load_instance_snapshot",
    "build_mac_to_ip_mapping",
    "find_instance",
    "resolve_owner_vmi_name",
]
