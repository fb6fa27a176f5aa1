# -*- coding: utf-8 -*-
"""
Service列表API
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from netlens.core.async_utils import run_blocking
from netlens.core.error_handler import create_error_handler, with_timeout


def create_service_router(mode_instance) -> APIRouter:
    """创建Service API路由"""
    router = APIRouter(
        prefix="/api/v1",
        tags=["K8s Service Resources"],
        dependencies=[Depends(mode_instance.auth_dependency)],
    )

    @router.get("/services")
    async def list_services(
        namespace: Optional[str] = Query(None, description="命名空间，为空则查询所有命名空间")
    ):
        """获取Service列表"""
        error_handler = create_error_handler(mode_instance.logger)

        @with_timeout(timeout_seconds=mode_instance.settings.k8s.request_timeout)
        async def get_service_list():
            return await run_blocking(
                mode_instance.resource_lister.list_services, namespace or ""
            )

        try:
            service_list = await get_service_list()
        except Exception as e:
            raise error_handler.handle_k8s_exception(
                e, resource_type="service", operation="list", namespace=namespace
            )

        mode_instance.logger.info(
            "[Service列表]成功获取%d个Service，命名空间: %s",
            len(service_list.get("items") or []),
            namespace or "所有",
        )
        return service_list

    return router
