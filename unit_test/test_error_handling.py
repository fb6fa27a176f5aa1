# -*- coding: utf-8 -*-
"""
错误处理测试
测试资源API的错误映射、鉴权和超时装饰器
"""

import asyncio
import logging
import os
from unittest.mock import patch

import pytest
from kubernetes.client.exceptions import ApiException

from netlens.core.auth import check_auth, extract_bearer_token
from netlens.core.config import Settings
from netlens.core.error_handler import ErrorType, create_error_handler, with_timeout
from netlens.modes.gateway_mode import GatewayMode


class TestResourceErrorHandler:
    """测试资源错误处理器"""

    def setup_method(self):
        """测试设置"""
        self.logger = logging.getLogger("test")
        self.error_handler = create_error_handler(self.logger)

    def test_handle_auth_error_401(self):
        """测试401认证错误处理"""
        api_exception = ApiException(status=401, reason="Unauthorized")

        http_exception = self.error_handler.handle_k8s_exception(
            api_exception, resource_type="pod", operation="list"
        )

        assert http_exception.status_code == 401
        assert http_exception.detail["error_type"] == ErrorType.AUTH_ERROR
        assert "认证失败" in http_exception.detail["message"]
        assert http_exception.detail["details"]["resource_type"] == "pod"

    def test_handle_not_found_error(self):
        """测试404资源不存在错误处理"""
        api_exception = ApiException(status=404, reason="Not Found")

        http_exception = self.error_handler.handle_k8s_exception(
            api_exception, resource_type="service", operation="list", namespace="default"
        )

        assert http_exception.status_code == 404
        assert http_exception.detail["error_type"] == ErrorType.NOT_FOUND
        assert http_exception.detail["details"]["namespace"] == "default"

    def test_handle_server_error(self):
        """测试服务器错误处理"""
        api_exception = ApiException(status=503, reason="Service Unavailable")

        http_exception = self.error_handler.handle_k8s_exception(
            api_exception, resource_type="node", operation="list"
        )

        assert http_exception.status_code == 502
        assert http_exception.detail["error_type"] == ErrorType.CONNECTION_ERROR
        assert "集群连接错误" in http_exception.detail["message"]

    def test_handle_timeout_error(self):
        """测试超时错误处理"""
        http_exception = self.error_handler.handle_k8s_exception(
            asyncio.TimeoutError("Operation timed out"), resource_type="pod"
        )

        assert http_exception.status_code == 408
        assert http_exception.detail["error_type"] == ErrorType.TIMEOUT_ERROR

    def test_handle_unexpected_error(self):
        """测试其他异常"""
        http_exception = self.error_handler.handle_k8s_exception(
            KeyError("items"), resource_type="pod", operation="list"
        )

        assert http_exception.status_code == 500
        assert http_exception.detail["error_type"] == ErrorType.PROCESSING_ERROR

    def test_handle_caller_auth_error(self):
        """测试调用方鉴权失败"""
        http_exception = self.error_handler.handle_auth_error("/api/v1/pods")

        assert http_exception.status_code == 401
        assert http_exception.detail["message"] == "Unauthorized"
        assert http_exception.headers == {"WWW-Authenticate": "Bearer"}


class TestBearerAuth:
    """测试Bearer鉴权"""

    def test_extract_token(self):
        """测试提取token"""
        assert extract_bearer_token("Bearer abc") == "abc"
        assert extract_bearer_token("bearer abc") == "abc"
        assert extract_bearer_token("Basic abc") == ""
        assert extract_bearer_token(None) == ""

    def test_check_auth(self):
        """测试token比对"""
        assert check_auth("Bearer secret", "secret")
        assert not check_auth("Bearer other", "secret")
        assert not check_auth("Bearer ", "secret")
        assert not check_auth("Bearer secret", "")


class TestTimeoutDecorator:
    """测试超时装饰器"""

    @pytest.mark.asyncio
    async def test_timeout_decorator_success(self):
        """测试超时装饰器正常执行"""

        @with_timeout(timeout_seconds=1)
        async def fast_operation():
            await asyncio.sleep(0.01)
            return "success"

        result = await fast_operation()
        assert result == "success"

    @pytest.mark.asyncio
    async def test_timeout_decorator_timeout(self):
        """测试超时装饰器超时场景"""

        @with_timeout(timeout_seconds=0.05)
        async def slow_operation():
            await asyncio.sleep(1)
            return "success"

        with pytest.raises(asyncio.TimeoutError):
            await slow_operation()


class TestModeIntegrationErrors:
    """测试模式集成错误场景"""

    def setup_method(self):
        """测试设置"""
        with patch.dict(os.environ, {"API_KEY": "test-key"}, clear=True):
            self.settings = Settings()

    @patch("kubernetes.config.load_incluster_config")
    @patch("kubernetes.config.load_kube_config")
    def test_config_loading_failure(self, mock_load_kube, mock_load_incluster):
        """测试集群内配置和kubeconfig都加载失败"""
        mock_load_incluster.side_effect = Exception("No incluster config")
        mock_load_kube.side_effect = Exception("No kubeconfig found")

        gateway_mode = GatewayMode(self.settings)

        with pytest.raises(Exception):
            asyncio.run(gateway_mode._init_k8s_client())
        assert gateway_mode.resource_lister is None

    @patch("netlens.modes.gateway_mode.DynamicClient")
    @patch("kubernetes.config.load_incluster_config")
    @patch("kubernetes.config.load_kube_config")
    def test_kubeconfig_fallback(
        self, mock_load_kube, mock_load_incluster, mock_dynamic_client
    ):
        """测试集群内配置失败时回退到kubeconfig"""
        mock_load_incluster.side_effect = Exception("No incluster config")

        gateway_mode = GatewayMode(self.settings)
        asyncio.run(gateway_mode._init_k8s_client())

        mock_load_kube.assert_called_once_with(config_file=None)
        assert gateway_mode.resource_lister is not None
        assert gateway_mode.resource_lister.vmi_api_version == "kubevirt.io/v1"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
