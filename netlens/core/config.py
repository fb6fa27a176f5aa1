# -*- coding: utf-8 -*-
"""
配置管理模块
支持从环境变量、配置文件等多种方式加载配置
"""

import logging
import os
import yaml
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field
from pathlib import Path

from netlens import __version__


class ConfigError(Exception):
    """配置缺失或非法"""


@dataclass
class ServerConfig:
    """HTTP服务配置"""

    host: str = "0.0.0.0"
    port: int = 443
    api_key: Optional[str] = None
    tls_cert_file: Optional[str] = None
    tls_key_file: Optional[str] = None


@dataclass
class K8sConfig:
    """Kubernetes配置"""

    in_cluster: bool = True  # 是否在集群内运行
    kubeconfig_path: Optional[str] = None
    request_timeout: int = 30  # 上游list调用超时（秒）
    vmi_api_version: str = "kubevirt.io/v1"


@dataclass
class Settings:
    """全局配置类"""

    # 基础配置
    app_name: str = "NetLens"
    version: str = __version__
    debug: bool = False
    log_level: str = "INFO"

    # 子配置
    server: ServerConfig = field(default_factory=ServerConfig)
    k8s: K8sConfig = field(default_factory=K8sConfig)

    def __init__(self, config_file: Optional[str] = None):
        """初始化配置"""
        self.app_name = "NetLens"
        self.version = __version__
        self.server = ServerConfig()
        self.k8s = K8sConfig()

        # 从环境变量加载
        self._load_from_env()

        # 从配置文件加载
        if config_file:
            self._load_from_file(config_file)

    def _load_from_env(self):
        """从环境变量加载配置"""
        # 基础配置
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        # 服务配置
        if host := os.getenv("HOST"):
            self.server.host = host
        if port := os.getenv("PORT"):
            self.server.port = int(port)
        if api_key := os.getenv("API_KEY"):
            self.server.api_key = api_key
        if cert_file := os.getenv("TLS_CERT_FILE"):
            self.server.tls_cert_file = cert_file
        if key_file := os.getenv("TLS_KEY_FILE"):
            self.server.tls_key_file = key_file

        # K8s配置
        self.k8s.in_cluster = os.getenv("K8S_IN_CLUSTER", "true").lower() == "true"
        if kubeconfig := os.getenv("KUBECONFIG"):
            self.k8s.kubeconfig_path = kubeconfig
        if timeout := os.getenv("K8S_REQUEST_TIMEOUT"):
            self.k8s.request_timeout = int(timeout)
        if vmi_api_version := os.getenv("VMI_API_VERSION"):
            self.k8s.vmi_api_version = vmi_api_version

    def _load_from_file(self, config_file: str):
        """从配置文件加载配置"""
        config_path = Path(config_file)
        if not config_path.exists():
            raise ConfigError(f"配置文件不存在: {config_file}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"加载配置文件失败: {e}") from e

        if config_data is not None and not isinstance(config_data, dict):
            raise ConfigError(f"配置文件顶层必须是映射: {config_file}")

        # 更新配置
        self._update_from_dict(config_data)

    def _update_from_dict(self, config_data: Dict[str, Any]):
        """从字典更新配置"""
        if not config_data:
            return

        # 基础配置
        for key in ["debug", "log_level"]:
            if key in config_data:
                setattr(self, key, config_data[key])

        # 服务配置
        if "server" in config_data:
            server_config = self._section(config_data, "server")
            for key in ["host", "port", "api_key", "tls_cert_file", "tls_key_file"]:
                if key in server_config:
                    setattr(self.server, key, server_config[key])

        # K8s配置
        if "k8s" in config_data:
            k8s_config = self._section(config_data, "k8s")
            for key in [
                "in_cluster",
                "kubeconfig_path",
                "request_timeout",
                "vmi_api_version",
            ]:
                if key in k8s_config:
                    setattr(self.k8s, key, k8s_config[key])

    def _section(self, config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
        """取配置文件中的子配置段，必须是映射"""
        section = config_data[name] or {}
        if not isinstance(section, dict):
            raise ConfigError(f"配置段 {name} 必须是映射")
        return section

    @property
    def effective_log_level(self) -> str:
        """实际生效的日志级别，DEBUG开启时强制为DEBUG"""
        return "DEBUG" if self.debug else self.log_level

    def validate(self):
        """校验启动必需的配置项，缺失时抛出ConfigError"""
        missing: List[str] = []
        if not self.server.api_key:
            missing.append("API_KEY")
        if not self.server.tls_cert_file or not self.server.tls_key_file:
            missing.append("TLS_CERT_FILE/TLS_KEY_FILE")

        if missing:
            raise ConfigError(f"缺少必需配置: {', '.join(missing)}")

        logging.getLogger("netlens.Settings").debug(
            "配置校验通过，监听端口: %d", self.server.port
        )
