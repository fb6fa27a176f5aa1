# -*- coding: utf-8 -*-
"""
VMI关联查询
根据Pod的ownerReferences找到所属的VirtualMachineInstance，并提取其接口MAC到IP的映射
"""

from typing import Any, Dict, List, Optional

from netlens.core.document import as_dict, as_list, get_non_empty_str, get_path, get_str
from netlens.core.resource_lister import VMI_KIND


def resolve_owner_vmi_name(pod: Dict[str, Any]) -> Optional[str]:
    """
    查找Pod所属VMI的名称

    只看第一个kind为VirtualMachineInstance的ownerReference，后续同类引用忽略

    Args:
        pod: Pod对象

    Returns:
        Optional[str]: VMI名称，没有VMI所有者时返回None
    """
    for owner_ref in as_list(get_path(pod, "metadata", "ownerReferences")) or []:
        if get_str(owner_ref, "kind") == VMI_KIND:
            return get_non_empty_str(owner_ref, "name")
    return None


def find_instance(
    namespace: Optional[str],
    owner_name: str,
    instances: Optional[List[Dict[str, Any]]],
) -> Optional[Dict[str, Any]]:
    """
    在VMI快照中查找名称和命名空间都匹配的实例

    Args:
        namespace: Pod所在命名空间
        owner_name: 所有者VMI名称
        instances: VMI列表，None表示列表不可用

    Returns:
        Optional[Dict]: 匹配到的VMI对象
    """
    if instances is None:
        return None

    for vmi in instances:
        vmi_name = get_str(vmi, "metadata", "name")
        vmi_namespace = get_str(vmi, "metadata", "namespace")
        # 元数据缺失或类型不符的对象直接跳过
        if vmi_name is None or vmi_namespace is None:
            continue

        if vmi_namespace == namespace and vmi_name == owner_name:
            return vmi

    return None


def build_mac_to_ip_mapping(vmi: Dict[str, Any]) -> Optional[Dict[str, str]]:
    """
    从VMI的status.interfaces构建MAC到IP的映射

    同一个MAC出现多次时后出现的覆盖先出现的

    Args:
        vmi: VMI对象

    Returns:
        Optional[Dict[str, str]]: 映射表；status或interfaces缺失、类型不符时返回None
    """
    interfaces = as_list(get_path(vmi, "status", "interfaces"))
    if interfaces is None:
        return None

    mapping = {}
    for interface in interfaces:
        if as_dict(interface) is None:
            continue

        mac = get_non_empty_str(interface, "mac")
        ip_address = get_non_empty_str(interface, "ipAddress")
        if mac is None or ip_address is None:
            continue

        mapping[mac] = ip_address

    return mapping
