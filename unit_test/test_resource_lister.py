# -*- coding: utf-8 -*-
"""
资源列表单元测试
"""

import unittest
from unittest.mock import Mock, patch

from kubernetes.client.exceptions import ApiException

from netlens.core.resource_lister import ResourceLister, VMI_KIND
from netlens.enrichment import load_instance_snapshot


class TestResourceLister(unittest.TestCase):
    """ResourceLister测试类"""

    def setUp(self):
        """测试初始化"""
        self.patcher = patch("netlens.core.resource_lister.client.CoreV1Api")
        self.mock_v1_api = self.patcher.start()
        self.mock_v1 = Mock()
        self.mock_v1_api.return_value = self.mock_v1

        self.mock_dynamic_client = Mock()
        self.mock_api_client = self.mock_dynamic_client.client
        self.mock_api_client.sanitize_for_serialization.side_effect = lambda obj: {
            "serialized": obj
        }

        self.lister = ResourceLister(self.mock_dynamic_client)

    def tearDown(self):
        self.patcher.stop()

    def test_list_pods_all_namespaces(self):
        """测试获取所有命名空间的Pod"""
        pod_list = Mock(items=[])
        self.mock_v1.list_pod_for_all_namespaces.return_value = pod_list

        result = self.lister.list_pods()

        self.assertEqual(result, {"serialized": pod_list})
        self.mock_v1.list_namespaced_pod.assert_not_called()

    def test_list_pods_namespaced(self):
        """测试按命名空间获取Pod"""
        pod_list = Mock(items=[])
        self.mock_v1.list_namespaced_pod.return_value = pod_list

        self.lister.list_pods("ns1")

        self.mock_v1.list_namespaced_pod.assert_called_once_with(namespace="ns1")

    def test_list_services(self):
        """测试获取Service"""
        self.lister.list_services()
        self.mock_v1.list_service_for_all_namespaces.assert_called_once()

        self.lister.list_services("default")
        self.mock_v1.list_namespaced_service.assert_called_once_with(namespace="default")

    def test_list_nodes(self):
        """测试获取Node"""
        node_list = Mock()
        self.mock_v1.list_node.return_value = node_list

        self.assertEqual(self.lister.list_nodes(), {"serialized": node_list})

    def test_list_virtual_machine_instances(self):
        """测试通过动态客户端获取VMI"""
        vmi_api = Mock()
        vmi_api.get.return_value.to_dict.return_value = {
            "items": [{"metadata": {"name": "vmi-a", "namespace": "ns1"}}]
        }
        self.mock_dynamic_client.resources.get.return_value = vmi_api

        result = self.lister.list_virtual_machine_instances("ns1")

        self.assertEqual(result, [{"metadata": {"name": "vmi-a", "namespace": "ns1"}}])
        self.mock_dynamic_client.resources.get.assert_called_once_with(
            api_version="kubevirt.io/v1", kind=VMI_KIND
        )
        vmi_api.get.assert_called_once_with(namespace="ns1")

    def test_list_virtual_machine_instances_all_namespaces(self):
        """测试VMI列表为空"""
        vmi_api = Mock()
        vmi_api.get.return_value.to_dict.return_value = {"items": None}
        self.mock_dynamic_client.resources.get.return_value = vmi_api

        self.assertEqual(self.lister.list_virtual_machine_instances(), [])
        vmi_api.get.assert_called_once_with(namespace=None)


class TestLoadInstanceSnapshot(unittest.TestCase):
    """VMI快照获取测试"""

    def test_snapshot_success(self):
        """测试正常获取"""
        lister = Mock()
        lister.list_virtual_machine_instances.return_value = []

        self.assertEqual(load_instance_snapshot(lister, "ns1"), [])
        lister.list_virtual_machine_instances.assert_called_once_with("ns1")

    def test_snapshot_failure_is_unavailable(self):
        """测试获取失败时返回None"""
        lister = Mock()
        lister.list_virtual_machine_instances.side_effect = ApiException(
            status=403, reason="Forbidden"
        )

        self.assertIsNone(load_instance_snapshot(lister))


if __name__ == "__main__":
    unittest.main()
