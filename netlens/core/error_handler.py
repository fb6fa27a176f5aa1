# -*- coding: utf-8 -*-
"""
统一错误处理模块
为资源列表API提供一致的错误响应格式
"""

import asyncio
import logging
from enum import Enum
from functools import wraps
from typing import Optional

from fastapi import HTTPException
from pydantic import BaseModel
from kubernetes.client.exceptions import ApiException


class ErrorType(str, Enum):
    """错误类型枚举"""

    CONNECTION_ERROR = "connection_error"
    AUTH_ERROR = "auth_error"
    NOT_FOUND = "not_found"
    PROCESSING_ERROR = "processing_error"
    TIMEOUT_ERROR = "timeout_error"


class ErrorDetails(BaseModel):
    """错误详情模型"""

    resource_type: Optional[str] = None
    operation: Optional[str] = None
    namespace: Optional[str] = None


class ErrorResponse(BaseModel):
    """统一错误响应模型"""

    code: int
    message: str
    error_type: ErrorType
    details: ErrorDetails


class ResourceErrorHandler:
    """资源API错误处理器"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def handle_k8s_exception(
        self,
        e: Exception,
        resource_type: Optional[str] = None,
        operation: Optional[str] = None,
        namespace: Optional[str] = None,
    ) -> HTTPException:
        """处理Kubernetes API异常"""

        details = ErrorDetails(
            resource_type=resource_type, operation=operation, namespace=namespace
        )

        # 记录错误日志
        log_prefix = f"[{resource_type or '资源'}{'列表' if operation == 'list' else '操作'}]"

        if isinstance(e, ApiException):
            # Kubernetes API异常
            if e.status == 401:
                error_type = ErrorType.AUTH_ERROR
                message = f"集群认证失败: {e.reason}"
                status_code = 401
            elif e.status == 403:
                error_type = ErrorType.AUTH_ERROR
                message = f"权限不足: {e.reason}"
                status_code = 403
            elif e.status == 404:
                error_type = ErrorType.NOT_FOUND
                message = f"资源不存在: {e.reason}"
                status_code = 404
            elif e.status is not None and e.status >= 500:
                error_type = ErrorType.CONNECTION_ERROR
                message = f"集群连接错误: {e.reason}"
                status_code = 502
            else:
                error_type = ErrorType.PROCESSING_ERROR
                message = f"API调用失败: {e.reason}"
                status_code = 500

            self.logger.error(
                "%sKubernetes API错误 (状态码: %s): %s", log_prefix, e.status, e.reason
            )

        elif isinstance(e, asyncio.TimeoutError):
            # 超时错误
            error_type = ErrorType.TIMEOUT_ERROR
            message = "操作超时"
            status_code = 408
            self.logger.error("%s操作超时", log_prefix)

        elif isinstance(e, ConnectionError):
            # 连接错误
            error_type = ErrorType.CONNECTION_ERROR
            message = f"连接失败: {str(e)}"
            status_code = 502
            self.logger.error("%s连接错误: %s", log_prefix, str(e))

        else:
            # 其他处理错误
            error_type = ErrorType.PROCESSING_ERROR
            message = f"处理失败: {str(e)}"
            status_code = 500
            self.logger.error("%s处理错误: %s", log_prefix, str(e))

        # 构建错误响应
        error_response = ErrorResponse(
            code=status_code, message=message, error_type=error_type, details=details
        )

        return HTTPException(status_code=status_code, detail=error_response.model_dump())

    def handle_auth_error(self, path: Optional[str] = None) -> HTTPException:
        """处理调用方鉴权失败"""
        self.logger.warning("[鉴权]拒绝未授权请求: %s", path or "-")

        error_response = ErrorResponse(
            code=401,
            message="Unauthorized",
            error_type=ErrorType.AUTH_ERROR,
            details=ErrorDetails(),
        )

        return HTTPException(
            status_code=401,
            detail=error_response.model_dump(),
            headers={"WWW-Authenticate": "Bearer"},
        )


def with_timeout(timeout_seconds: float = 30):
    """超时装饰器"""

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await asyncio.wait_for(
                    func(*args, **kwargs), timeout=timeout_seconds
                )
            except asyncio.TimeoutError:
                raise asyncio.TimeoutError(f"操作超时 ({timeout_seconds}秒)")

        return wrapper

    return decorator


def create_error_handler(logger: logging.Logger) -> ResourceErrorHandler:
    """创建错误处理器实例"""
    return ResourceErrorHandler(logger)
