# -*- coding: utf-8 -*-
"""
Pod列表API
返回的PodList中，network-status注解已用VMI上报的IP回填
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Query

from netlens.core.async_utils import log_elapsed, run_blocking
from netlens.core.error_handler import create_error_handler, with_timeout
from netlens.enrichment import enrich_pod_list, load_instance_snapshot


def create_pod_router(mode_instance) -> APIRouter:
    """创建Pod API路由"""
    router = APIRouter(
        prefix="/api/v1",
        tags=["K8s Pod Resources"],
        dependencies=[Depends(mode_instance.auth_dependency)],
    )
    timeout_seconds = mode_instance.settings.k8s.request_timeout

    @router.get("/pods")
    @log_elapsed("list_pods")
    async def list_pods(
        namespace: Optional[str] = Query(None, description="命名空间，为空则查询所有命名空间")
    ):
        """获取Pod列表并回填VMI网卡IP"""
        error_handler = create_error_handler(mode_instance.logger)
        lister = mode_instance.resource_lister

        mode_instance.logger.info(
            "[Pod列表]开始获取Pod列表，命名空间: %s", namespace or "所有"
        )

        # 获取Pod列表 (带超时处理)
        @with_timeout(timeout_seconds=timeout_seconds)
        async def get_pod_list():
            return await run_blocking(lister.list_pods, namespace or "")

        try:
            pod_list = await get_pod_list()
        except Exception as e:
            raise error_handler.handle_k8s_exception(
                e, resource_type="pod", operation="list", namespace=namespace
            )

        # VMI快照获取失败只影响IP回填，不影响响应
        @with_timeout(timeout_seconds=timeout_seconds)
        async def get_instance_snapshot():
            return await run_blocking(load_instance_snapshot, lister, namespace or "")

        try:
            instances = await get_instance_snapshot()
        except asyncio.TimeoutError as e:
            mode_instance.logger.warning("[Pod列表]获取VMI列表超时，跳过IP回填: %s", e)
            instances = None

        pods = pod_list.get("items") or []
        enrich_pod_list(pods, instances)

        mode_instance.logger.info("[Pod列表]成功获取%d个Pod", len(pods))
        return pod_list

    return router
