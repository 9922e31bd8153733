"""Gateway API 라우트

- POST /api/recommend: 업스트림 추천 API 프록시
- POST /api/save: 운동 기록 저장 (메모리)
- GET  /api/saved-workouts, /api/saved-workouts/{id}: 저장된 기록 조회
- GET  /api/health: 헬스 체크
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from gateway.config import GatewaySettings
from gateway.exceptions import (
    GatewayError,
    NotFoundError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from gateway.models import (
    ErrorResponse,
    HealthResponse,
    SavedWorkoutListResponse,
    SavedWorkoutResponse,
    SaveWorkoutRequest,
    SaveWorkoutResponse,
)
from gateway.services import ProxyResult, UpstreamProxy, WorkoutRecordStore, utc_timestamp
from shared.utils import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/api")

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def get_settings(request: Request) -> GatewaySettings:
    return request.app.state.settings


def get_record_store(request: Request) -> WorkoutRecordStore:
    return request.app.state.record_store


def get_upstream_proxy(request: Request) -> UpstreamProxy:
    return request.app.state.upstream_proxy


def _proxy_error(result: ProxyResult) -> GatewayError:
    """실패한 프록시 결과를 오류로 변환"""
    if result.transport_failure:
        return TransportError("추천 API에 연결하지 못했습니다", status=result.status, tried=result.tried)
    message = "업스트림 경로를 찾지 못했거나 요청이 실패했습니다"
    if result.status == 404:
        return NotFoundError(message, extra={"status": 404, "tried": list(result.tried)})
    return UpstreamError(message, status=result.status, tried=result.tried)


@router.post("/recommend", responses=_ERROR_RESPONSES)
async def recommend(
    body: Any = Body(default=None),
    proxy: UpstreamProxy = Depends(get_upstream_proxy),
):
    """추천 요청을 업스트림에 그대로 전달

    업스트림 응답(JSON 또는 텍스트)을 가공 없이 반환
    """
    # JSON이 아닌 본문은 빈 객체로 취급
    if isinstance(body, (bytes, bytearray)):
        body = None

    try:
        result = await proxy.post(body)
    except Exception as e:
        logger.exception("프록시 오류 /api/recommend")
        raise TransportError("추천 API에 연결하지 못했습니다") from e

    if not result.ok:
        logger.error(
            f"업스트림 실패/경로 없음: status={result.status} tried={result.tried} "
            f"body={(result.body or '')[:500]!r}"
        )
        raise _proxy_error(result)

    return JSONResponse(content=result.data)


@router.post(
    "/save",
    status_code=201,
    response_model=SaveWorkoutResponse,
    responses=_ERROR_RESPONSES,
)
async def save_workout(
    payload: Optional[SaveWorkoutRequest] = Body(default=None),
    store: WorkoutRecordStore = Depends(get_record_store),
):
    """운동 기록 저장 (age/gender/height/weight/bmi 필수)"""
    payload = payload or SaveWorkoutRequest()

    missing = payload.missing_fields()
    if missing:
        raise ValidationError(f"필수 데이터 누락: {', '.join(missing)}")

    try:
        record = store.add_unique(payload.model_dump())
    except GatewayError:
        raise
    except Exception as e:
        logger.exception("운동 기록 저장 실패")
        raise GatewayError("운동 기록을 저장하지 못했습니다") from e

    return SaveWorkoutResponse(message="저장되었습니다", data={"id": record.id})


@router.get("/saved-workouts", response_model=SavedWorkoutListResponse)
async def list_saved_workouts(store: WorkoutRecordStore = Depends(get_record_store)):
    return {"success": True, "data": [record.model_dump() for record in store.get_all()]}


@router.get(
    "/saved-workouts/{record_id}",
    response_model=SavedWorkoutResponse,
    responses=_ERROR_RESPONSES,
)
async def get_saved_workout(
    record_id: str,
    store: WorkoutRecordStore = Depends(get_record_store),
):
    record = store.find_by_id(record_id)
    if record is None:
        raise NotFoundError("저장된 운동 기록을 찾을 수 없습니다")
    return {"success": True, "data": record.model_dump()}


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: GatewaySettings = Depends(get_settings)):
    """헬스 체크"""
    return HealthResponse(
        python_api=settings.upstream_base_url,
        recommend_path=settings.recommend_path_label,
        allowed_origins=settings.allowed_origin_list,
        time=utc_timestamp(),
    )
