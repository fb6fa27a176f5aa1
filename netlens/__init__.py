# -*- coding: utf-8 -*-
"""
NetLens - Kubernetes只读聚合网关
"""

__version__ = "0.1.0"
