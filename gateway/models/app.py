"""App-facing request/response models for Gateway endpoints."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# 프론트엔드가 보내는 값은 숫자/문자열이 섞여 있음
Scalar = Union[str, int, float, bool]

REQUIRED_WORKOUT_FIELDS = ("age", "gender", "height", "weight", "bmi")


class SaveWorkoutRequest(BaseModel):
    """운동 기록 저장 요청 (필수 5개 필드 + 임의의 추가 필드)

    필수 필드 누락은 422가 아니라 400으로 응답해야 하므로 모두 Optional로 받고
    missing_fields()로 직접 검사함
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "age": 26,
                "gender": "female",
                "height": 165,
                "weight": 55,
                "bmi": 20.2,
                "goal": "fat_loss",
            }
        },
    )

    age: Optional[Scalar] = Field(default=None, description="나이")
    gender: Optional[Scalar] = Field(default=None, description="성별")
    height: Optional[Scalar] = Field(default=None, description="키 (cm)")
    weight: Optional[Scalar] = Field(default=None, description="몸무게 (kg)")
    bmi: Optional[Scalar] = Field(default=None, description="BMI")

    def missing_fields(self) -> List[str]:
        """비어 있는 필수 필드 (None 또는 빈 문자열)"""
        return [
            name
            for name in REQUIRED_WORKOUT_FIELDS
            if getattr(self, name) is None or getattr(self, name) == ""
        ]


class WorkoutRecord(BaseModel):
    """저장된 운동 기록 (생성 후 변경 없음)"""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str = Field(..., description="시간 기반 ID")
    timestamp: str = Field(..., description="저장 시각 (ISO-8601, UTC)")
    age: Scalar
    gender: Scalar
    height: Scalar
    weight: Scalar
    bmi: Scalar


class SavedWorkoutId(BaseModel):
    id: str


class SaveWorkoutResponse(BaseModel):
    success: bool = True
    message: str
    data: SavedWorkoutId


class SavedWorkoutListResponse(BaseModel):
    success: bool = True
    data: List[Dict[str, Any]]


class SavedWorkoutResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    ok: bool = True
    proxy: str = "up"
    python_api: str
    recommend_path: str
    allowed_origins: List[str]
    time: str


class ErrorResponse(BaseModel):
    """오류 응답 (업스트림 실패 시 status/tried 포함)"""

    model_config = ConfigDict(extra="allow")

    success: bool = False
    error: str
    status: Optional[int] = None
    tried: Optional[List[str]] = None
