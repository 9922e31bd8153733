"""Gateway Service - 운동 추천 API 프록시 서버

사용법:
    PYTHONPATH=. python -m gateway.main

포트: 8080 (기본, PORT 환경 변수)
"""

from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
load_dotenv(override=True)

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gateway import __version__
from gateway.api import router
from gateway.config import GatewaySettings, settings as default_settings
from gateway.exceptions import GatewayError
from gateway.middleware import OriginAllowListMiddleware, PathNormalizeMiddleware
from gateway.services import UpstreamProxy, WorkoutRecordStore
from shared.utils import get_logger


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 라이프사이클 관리"""
    settings: GatewaySettings = app.state.settings
    logger.info(f"Proxy listening on :{settings.port}")
    logger.info(f"PYTHON_API       = {settings.upstream_base_url}")
    logger.info(f"RECOMMEND_PATH   = {settings.recommend_path_label}")
    logger.info(f"ALLOWED_ORIGINS  = {', '.join(settings.allowed_origin_list)}")
    yield
    logger.info("Gateway Service 종료")


async def gateway_error_handler(request: Request, exc: GatewayError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_payload()))


async def unhandled_error_handler(request: Request, exc: Exception):
    """처리되지 않은 예외도 오류 형식으로 응답 (500)"""
    logger.error(f"처리되지 않은 오류 {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "서버 내부 오류가 발생했습니다"},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """본문 파싱/검증 실패는 422 대신 400 오류 형식으로 응답"""
    logger.warning(f"요청 검증 실패 {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "요청 본문 형식이 올바르지 않습니다",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def create_app(
    settings: Optional[GatewaySettings] = None,
    record_store: Optional[WorkoutRecordStore] = None,
    upstream_proxy: Optional[UpstreamProxy] = None,
) -> FastAPI:
    """게이트웨이 앱 생성

    Args:
        settings: 설정 (없으면 환경 변수 기반 기본 설정)
        record_store: 운동 기록 저장소 (없으면 새로 생성)
        upstream_proxy: 업스트림 프록시 (없으면 설정으로 생성)
    """
    settings = settings or default_settings

    app = FastAPI(
        title="YukFit Gateway API",
        description="운동 추천 API 프록시 + 운동 기록 임시 저장",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.record_store = record_store or WorkoutRecordStore()
    app.state.upstream_proxy = upstream_proxy or UpstreamProxy(
        base_url=settings.upstream_base_url,
        candidate_paths=settings.recommend_paths,
        timeout=settings.upstream_timeout,
    )

    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # 나중에 추가한 미들웨어가 바깥쪽: 경로 정규화 -> CORS -> 라우터
    app.add_middleware(OriginAllowListMiddleware, allowed_origins=settings.allowed_origin_list)
    app.add_middleware(PathNormalizeMiddleware)

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gateway.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )
