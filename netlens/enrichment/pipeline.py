# -*- coding: utf-8 -*-
"""
Pod网络状态增强

KubeVirt的虚拟机网卡在Pod的network-status注解中通常没有IP。
这里用VMI status.interfaces上报的MAC/IP对回填缺失的ips字段：

    Pod.ownerReferences -> VMI(name, namespace) -> {mac: ipAddress} -> network["ips"]

每一步查不到都只会留下空的ips，不会让整个列表请求失败。
"""

import logging
from typing import Any, Dict, List, Optional

from netlens.core.document import as_dict, get_non_empty_str, get_path, get_str
from netlens.core.resource_lister import ResourceLister
from .annotation_codec import (
    NETWORK_STATUS_ANNOTATION,
    decode_network_status,
    encode_network_status,
)
from .vmi_lookup import build_mac_to_ip_mapping, find_instance, resolve_owner_vmi_name

logger = logging.getLogger("netlens.enrichment")


def load_instance_snapshot(
    lister: ResourceLister, namespace: str = ""
) -> Optional[List[Dict[str, Any]]]:
    """
    获取本次请求使用的VMI快照

    Returns:
        Optional[List[Dict]]: VMI列表；获取失败时返回None表示不可用
    """
    try:
        return lister.list_virtual_machine_instances(namespace)
    except Exception as e:
        # 没有安装KubeVirt或没有权限时同样走这里
        logger.warning("[网络状态增强]无法获取VMI列表，跳过IP回填: %s", e)
        return None


def _lookup_address_mapping(
    pod: Dict[str, Any], instances: Optional[List[Dict[str, Any]]]
) -> Optional[Dict[str, str]]:
    """查找Pod所属VMI并返回其MAC到IP映射，任一步失败返回None"""
    if instances is None:
        return None

    owner_name = resolve_owner_vmi_name(pod)
    if owner_name is None:
        return None

    vmi = find_instance(get_str(pod, "metadata", "namespace"), owner_name, instances)
    if vmi is None:
        return None

    return build_mac_to_ip_mapping(vmi)


def _lookup_ips(
    network: Dict[str, Any], address_mapping: Optional[Dict[str, str]]
) -> List[str]:
    """计算单个接口描述应填入的ips，最多一个IP"""
    if not address_mapping:
        return []

    mac = get_non_empty_str(network, "mac")
    if mac is None:
        return []

    ip_address = address_mapping.get(mac)
    if ip_address is None:
        return []

    return [ip_address]


def enrich_pod(
    pod: Dict[str, Any], instances: Optional[List[Dict[str, Any]]]
) -> bool:
    """
    回填单个Pod的网络状态注解

    Args:
        pod: Pod对象，原地修改
        instances: VMI快照，None表示不可用

    Returns:
        bool: 注解是否被重写
    """
    annotations = as_dict(get_path(pod, "metadata", "annotations"))
    if annotations is None or NETWORK_STATUS_ANNOTATION not in annotations:
        return False

    networks = decode_network_status(annotations[NETWORK_STATUS_ANNOTATION])
    if networks is None:
        logger.debug(
            "[网络状态增强]注解无法解析，保持原样: %s/%s",
            get_str(pod, "metadata", "namespace"),
            get_str(pod, "metadata", "name"),
        )
        return False

    # 已经带ips键的接口（即使为空数组）不再处理
    pending = [network for network in networks if "ips" not in network]
    if pending:
        address_mapping = _lookup_address_mapping(pod, instances)
        for network in pending:
            network["ips"] = _lookup_ips(network, address_mapping)

    try:
        encoded = encode_network_status(networks)
    except (TypeError, ValueError) as e:
        logger.warning(
            "[网络状态增强]注解编码失败，保持原样: %s/%s, 错误: %s",
            get_str(pod, "metadata", "namespace"),
            get_str(pod, "metadata", "name"),
            e,
        )
        return False

    annotations[NETWORK_STATUS_ANNOTATION] = encoded
    return True


def enrich_pod_list(
    pods: List[Dict[str, Any]], instances: Optional[List[Dict[str, Any]]]
) -> None:
    """
    回填Pod列表中所有Pod的网络状态注解，原地修改

    单个Pod处理失败只记录日志，不影响其余Pod，也不会向调用方抛出异常

    Args:
        pods: Pod对象列表
        instances: VMI快照，None表示不可用
    """
    rewritten = 0
    for pod in pods:
        try:
            if enrich_pod(pod, instances):
                rewritten += 1
        except Exception as e:
            logger.error(
                "[网络状态增强]处理Pod失败: %s/%s, 错误: %s",
                get_str(pod, "metadata", "namespace"),
                get_str(pod, "metadata", "name"),
                e,
            )

    logger.debug(
        "[网络状态增强]处理%d个Pod，重写%d个注解，VMI快照: %s",
        len(pods),
        rewritten,
        "不可用" if instances is None else len(instances),
    )
