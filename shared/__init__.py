"""Shared module - 게이트웨이와 배포 스크립트가 공유하는 유틸리티"""

from shared.utils import get_logger

__all__ = [
    "get_logger",
]
