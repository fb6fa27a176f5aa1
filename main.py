#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
NetLens 主启动文件
以HTTPS只读网关方式对外提供Pod/Service/Node列表，Pod网络状态注解已用VMI上报的IP回填
"""

import argparse
import asyncio
import sys
import urllib3

from netlens.core.config import ConfigError, Settings
from netlens.core.logger import set_log_level, setup_logger
from netlens.modes.gateway_mode import GatewayMode


async def main():
    """主启动函数"""
    parser = argparse.ArgumentParser(description="NetLens")
    parser.add_argument("--port", type=int, help="服务端口 (默认: PORT环境变量或443)")
    parser.add_argument("--host", help="服务地址 (默认: 0.0.0.0)")
    parser.add_argument("--config", help="配置文件路径")

    args = parser.parse_args()

    # 设置日志
    logger = setup_logger()

    # 初始化配置
    try:
        settings = Settings(config_file=args.config)
        if args.port:
            settings.server.port = args.port
        if args.host:
            settings.server.host = args.host
        settings.validate()
    except (ConfigError, ValueError) as e:
        logger.error("配置错误: %s", e)
        sys.exit(1)

    set_log_level(logger, settings.effective_log_level)
    logger.info("启动 NetLens - 端口: %d", settings.server.port)

    gateway_mode = GatewayMode(settings)
    try:
        await gateway_mode.start(host=settings.server.host, port=settings.server.port)
    except KeyboardInterrupt:
        logger.info("收到停止信号，正在关闭服务...")
    except Exception as e:
        logger.error("启动失败: %s", e)
        sys.exit(1)
    finally:
        await gateway_mode.stop()


def run():
    """命令行入口"""
    urllib3.disable_warnings()
    asyncio.run(main())


if __name__ == "__main__":
    run()
