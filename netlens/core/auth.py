# -*- coding: utf-8 -*-
"""
调用方鉴权
校验 Authorization: Bearer <API_KEY> 请求头
"""

import logging
import secrets
from typing import Optional

from fastapi import Request

from .error_handler import create_error_handler

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """从Authorization头中提取token，scheme不区分大小写；格式不符时返回空串"""
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :]
    return ""


def check_auth(authorization: Optional[str], api_key: str) -> bool:
    """校验请求携带的token是否与配置的API_KEY一致"""
    token = extract_bearer_token(authorization)
    if not token or not api_key:
        return False
    return secrets.compare_digest(token.encode("utf-8"), api_key.encode("utf-8"))


def create_auth_dependency(api_key: str):
    """创建FastAPI鉴权依赖"""
    error_handler = create_error_handler(logging.getLogger("netlens.auth"))

    async def require_api_key(request: Request):
        if not check_auth(request.headers.get("Authorization"), api_key):
            raise error_handler.handle_auth_error(request.url.path)

    return require_api_key
