"""Gateway 설정

환경 변수:
- PORT: 리스닝 포트 (기본값: 8080)
- PYTHON_API: 업스트림 추천 API 주소 (끝 슬래시 제거)
- PYTHON_RECOMMEND_PATH: 추천 경로를 알고 있으면 지정 (예: /predict), 비우면 자동 탐색
- ALLOWED_ORIGINS: 쉼표로 구분된 허용 Origin 목록
- UPSTREAM_TIMEOUT: 업스트림 시도 1회당 타임아웃 (초)
"""

from typing import List, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gateway.middleware import normalize_origin


# 우선순위 순서 그대로 유지
DEFAULT_RECOMMEND_PATHS: Tuple[str, ...] = (
    "/api/recommend",
    "/recommend",
    "/api/predict",
    "/predict",
    "/api/recommendations",
    "/recommendations",
)

AUTO_FALLBACK_LABEL = "(auto-fallback)"


class GatewaySettings(BaseSettings):
    """게이트웨이 설정"""

    # 빈 환경 변수(PYTHON_API= 등)는 기본값 사용
    model_config = SettingsConfigDict(env_prefix="", env_file=".env", env_ignore_empty=True, extra="ignore")

    # 서버 설정
    host: str = Field(default="0.0.0.0", description="호스트")
    port: int = Field(default=8080, description="포트")
    log_level: str = Field(default="INFO", description="로그 레벨")

    # 업스트림
    python_api: str = Field(
        default="https://pythonapiyukfit.up.railway.app",
        description="업스트림 추천 API 주소",
    )
    python_recommend_path: str = Field(
        default="",
        description="추천 경로 고정 (비우면 후보 경로 자동 탐색)",
    )
    upstream_timeout: float = Field(default=15.0, gt=0, description="시도당 타임아웃 (초)")

    # CORS
    allowed_origins: str = Field(
        default="https://yukfit.netlify.app,http://localhost:8080,http://localhost:5173",
        description="쉼표로 구분된 허용 Origin",
    )

    @property
    def upstream_base_url(self) -> str:
        return self.python_api.strip().rstrip("/")

    @property
    def recommend_paths(self) -> Tuple[str, ...]:
        explicit = self.python_recommend_path.strip()
        return (explicit,) if explicit else DEFAULT_RECOMMEND_PATHS

    @property
    def recommend_path_label(self) -> str:
        return self.python_recommend_path.strip() or AUTO_FALLBACK_LABEL

    @property
    def allowed_origin_list(self) -> List[str]:
        """정규화된 허용 Origin (중복/빈 값 제거, 순서 유지)"""
        origins: List[str] = []
        for raw in self.allowed_origins.split(","):
            origin = normalize_origin(raw)
            if origin and origin not in origins:
                origins.append(origin)
        return origins


settings = GatewaySettings()
