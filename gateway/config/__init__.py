"""Gateway 설정"""

from .settings import (
    AUTO_FALLBACK_LABEL,
    DEFAULT_RECOMMEND_PATHS,
    GatewaySettings,
    settings,
)

__all__ = [
    "AUTO_FALLBACK_LABEL",
    "DEFAULT_RECOMMEND_PATHS",
    "GatewaySettings",
    "settings",
]
