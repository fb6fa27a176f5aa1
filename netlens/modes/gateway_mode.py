# -*- coding: utf-8 -*-
"""
网关模式
使用集群内权限拉取资源，作为Pod部署在K8s集群中，通过HTTPS对外提供只读列表
"""

from fastapi import FastAPI
from fastapi.openapi.docs import get_swagger_ui_html
import uvicorn
from kubernetes import client, config
from kubernetes.dynamic import DynamicClient

from netlens.core.auth import create_auth_dependency
from netlens.core.config import Settings
from netlens.core.resource_lister import ResourceLister
from .base_mode import BaseMode
from .k8s.resources.pod_api import create_pod_router
from .k8s.resources.service_api import create_service_router
from .k8s.resources.node_api import create_node_router


class GatewayMode(BaseMode):
    """网关模式实现"""

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self.app = None
        self.api_client = None
        self.dynamic_client = None
        self.resource_lister = None
        self.auth_dependency = create_auth_dependency(settings.server.api_key or "")

    async def _init_k8s_client(self):
        """初始化Kubernetes客户端"""
        k8s_settings = self.settings.k8s
        try:
            if not k8s_settings.in_cluster:
                raise config.ConfigException("已配置为集群外运行")

            # 使用集群内配置
            config.load_incluster_config()
            self.logger.info("成功加载集群内Kubernetes配置")

        except Exception as e:
            self.logger.warning("加载集群内配置失败: %s，尝试使用kubeconfig", e)
            # 尝试使用本地kubeconfig（开发环境）
            try:
                config.load_kube_config(config_file=k8s_settings.kubeconfig_path)
                self.logger.info("使用本地kubeconfig初始化成功")
            except Exception as e2:
                self.logger.error("使用本地kubeconfig也失败: %s", e2)
                raise

        # 创建API客户端和动态客户端
        self.api_client = client.ApiClient()
        self.dynamic_client = DynamicClient(self.api_client)
        self.resource_lister = ResourceLister(
            self.dynamic_client, vmi_api_version=k8s_settings.vmi_api_version
        )
        self.logger.info("Kubernetes动态客户端初始化成功")

    def _create_app(self) -> FastAPI:
        """创建FastAPI应用"""
        app = FastAPI(
            title=self.settings.app_name,
            version=self.settings.version,
            description="NetLens - K8s只读聚合网关",
            docs_url=None,
        )

        # 基础路由
        @app.get("/")
        async def root():
            return {
                "code": 200,
                "data": {
                    "message": "NetLens - K8s只读聚合网关",
                    "version": self.settings.version,
                },
            }

        @app.get("/docs", include_in_schema=False)
        async def custom_swagger_ui_html():
            return get_swagger_ui_html(
                openapi_url=app.openapi_url, title="NetLens APIs"
            )

        @app.get("/health")
        async def health():
            """健康检查"""
            return {"code": 200, "data": {"status": "healthy"}}

        # 注册K8s资源列表路由
        app.include_router(create_pod_router(self))
        app.include_router(create_service_router(self))
        app.include_router(create_node_router(self))

        return app

    async def start(self, host: str = "0.0.0.0", port: int = 443):
        """启动网关模式"""
        self.logger.info("正在启动网关模式...")

        # 初始化Kubernetes客户端
        await self._init_k8s_client()

        # 创建FastAPI应用
        self.app = self._create_app()

        # 启动HTTPS服务
        server_config = uvicorn.Config(
            self.app,
            host=host,
            port=port,
            log_level=self.settings.effective_log_level.lower(),
            ssl_certfile=self.settings.server.tls_cert_file,
            ssl_keyfile=self.settings.server.tls_key_file,
        )
        server = uvicorn.Server(server_config)

        self.logger.info("网关模式启动成功，监听 %s:%d", host, port)
        await server.serve()

    async def stop(self):
        """停止服务"""
        self.logger.info("正在停止网关模式...")
        if self.api_client:
            self.api_client.close()
