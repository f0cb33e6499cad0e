"""
매칭 서비스 모듈
"""
from .container import ServiceContainer, build_container

__all__ = [
    "ServiceContainer",
    "build_container",
]
