# -*- coding: utf-8 -*-
"""
K8s资源列表模块
按资源类型（可选命名空间）拉取完整列表，并转换为可直接JSON编码的字典
"""

import logging
from typing import Dict, List, Any

from kubernetes import client
from kubernetes.dynamic import DynamicClient

VMI_KIND = "VirtualMachineInstance"


class ResourceLister:
    """K8s资源列表工具类，所有方法失败时直接抛出异常，由调用方决定如何处理"""

    def __init__(
        self, dynamic_client: DynamicClient, vmi_api_version: str = "kubevirt.io/v1"
    ):
        """
        初始化资源列表工具类

        Args:
            dynamic_client: Kubernetes动态客户端
            vmi_api_version: VirtualMachineInstance资源的apiVersion
        """
        self.dynamic_client = dynamic_client
        self.vmi_api_version = vmi_api_version
        self.logger = logging.getLogger("netlens.ResourceLister")

        # 初始化API客户端
        self.api_client = self.dynamic_client.client
        self.v1 = client.CoreV1Api(self.api_client)

    def _serialize(self, resource_list) -> Dict[str, Any]:
        """将客户端模型对象转换为与apiserver一致的camelCase字典"""
        return self.api_client.sanitize_for_serialization(resource_list)

    def list_pods(self, namespace: str = "") -> Dict[str, Any]:
        """
        获取Pod列表

        Args:
            namespace: 命名空间，为空表示所有命名空间

        Returns:
            Dict: PodList对象
        """
        if namespace:
            pod_list = self.v1.list_namespaced_pod(namespace=namespace)
        else:
            pod_list = self.v1.list_pod_for_all_namespaces()

        self.logger.debug("获取到%d个Pod，命名空间: %s", len(pod_list.items), namespace or "所有")
        return self._serialize(pod_list)

    def list_services(self, namespace: str = "") -> Dict[str, Any]:
        """获取Service列表"""
        if namespace:
            service_list = self.v1.list_namespaced_service(namespace=namespace)
        else:
            service_list = self.v1.list_service_for_all_namespaces()

        return self._serialize(service_list)

    def list_nodes(self) -> Dict[str, Any]:
        """获取Node列表"""
        return self._serialize(self.v1.list_node())

    def list_virtual_machine_instances(self, namespace: str = "") -> List[Dict[str, Any]]:
        """
        获取VirtualMachineInstance列表

        Args:
            namespace: 命名空间，为空表示所有命名空间

        Returns:
            List[Dict]: VMI对象列表
        """
        vmi_api = self.dynamic_client.resources.get(
            api_version=self.vmi_api_version, kind=VMI_KIND
        )
        vmis = vmi_api.get(namespace=namespace or None)

        return vmis.to_dict().get("items") or []
