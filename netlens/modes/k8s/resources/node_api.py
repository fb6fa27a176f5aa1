# -*- coding: utf-8 -*-
"""
Node列表API
"""

from fastapi import APIRouter, Depends

from netlens.core.async_utils import run_blocking
from netlens.core.error_handler import create_error_handler, with_timeout


def create_node_router(mode_instance) -> APIRouter:
    """创建Node API路由"""
    router = APIRouter(
        prefix="/api/v1",
        tags=["K8s Node Resources"],
        dependencies=[Depends(mode_instance.auth_dependency)],
    )

    @router.get("/nodes")
    async def list_nodes():
        """获取Node列表"""
        error_handler = create_error_handler(mode_instance.logger)

        @with_timeout(timeout_seconds=mode_instance.settings.k8s.request_timeout)
        async def get_node_list():
            return await run_blocking(mode_instance.resource_lister.list_nodes)

        try:
            node_list = await get_node_list()
        except Exception as e:
            raise error_handler.handle_k8s_exception(
                e, resource_type="node", operation="list"
            )

        mode_instance.logger.info(
            "[Node列表]成功获取%d个Node", len(node_list.get("items") or [])
        )
        return node_list

    return router
