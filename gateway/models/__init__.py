"""Gateway Models - 앱 요청/응답 모델"""

from .app import (
    REQUIRED_WORKOUT_FIELDS,
    ErrorResponse,
    HealthResponse,
    SavedWorkoutListResponse,
    SavedWorkoutResponse,
    SaveWorkoutRequest,
    SaveWorkoutResponse,
    WorkoutRecord,
)

__all__ = [
    "REQUIRED_WORKOUT_FIELDS",
    "ErrorResponse",
    "HealthResponse",
    "SavedWorkoutListResponse",
    "SavedWorkoutResponse",
    "SaveWorkoutRequest",
    "SaveWorkoutResponse",
    "WorkoutRecord",
]
