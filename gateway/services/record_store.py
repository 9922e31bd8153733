"""운동 기록 임시 저장소 (프로세스 메모리)

재시작 시 모두 사라짐. 삭제/수정 기능 없음.
"""

import threading
import time
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from gateway.exceptions import ConflictError
from gateway.models import REQUIRED_WORKOUT_FIELDS, WorkoutRecord
from shared.utils import get_logger


logger = get_logger(__name__)

_SERVER_FIELDS = ("id", "timestamp")


def _same_value(left: Any, right: Any) -> bool:
    """필드 값 비교 ("170"과 170, True와 1은 서로 다른 값)"""
    if isinstance(left, (bool, str)) or isinstance(right, (bool, str)):
        return type(left) is type(right) and left == right
    return left == right


def utc_timestamp() -> str:
    """ISO-8601 UTC, 밀리초 + Z (예: 2025-01-11T09:30:00.123Z)"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class WorkoutRecordStore:
    """메모리 기반 운동 기록 저장소

    FastAPI가 핸들러를 워커 스레드에서 실행할 수 있으므로 모든 접근은 lock으로 직렬화함

    사용 예시:
        store = WorkoutRecordStore()
        record = store.add_unique({"age": 26, "gender": "female", ...})
        store.find_by_id(record.id)
    """

    def __init__(self):
        self._records: List[WorkoutRecord] = []
        self._lock = threading.Lock()
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._records)

    def _next_id(self) -> str:
        # 밀리초 시각 기반, 같은 밀리초 안에서도 증가하도록 보정
        candidate = max(time.time_ns() // 1_000_000, self._last_id + 1)
        self._last_id = candidate
        return str(candidate)

    def _add_locked(self, fields: Mapping[str, Any]) -> WorkoutRecord:
        data = {k: v for k, v in fields.items() if k not in _SERVER_FIELDS}
        record = WorkoutRecord(id=self._next_id(), timestamp=utc_timestamp(), **data)
        self._records.append(record)
        return record

    def _exists_locked(self, candidate: Mapping[str, Any]) -> bool:
        return any(
            all(_same_value(getattr(record, key), candidate.get(key)) for key in REQUIRED_WORKOUT_FIELDS)
            for record in self._records
        )

    def add(self, fields: Mapping[str, Any]) -> WorkoutRecord:
        """기록 추가 (ID, 저장 시각 부여)"""
        with self._lock:
            return self._add_locked(fields)

    def exists(self, candidate: Mapping[str, Any]) -> bool:
        """필수 5개 필드가 모두 같은 기록이 있는지 확인"""
        with self._lock:
            return self._exists_locked(candidate)

    def add_unique(self, fields: Mapping[str, Any]) -> WorkoutRecord:
        """중복 확인과 추가를 한 번에 수행

        Raises:
            ConflictError: 필수 필드가 모두 같은 기록이 이미 있음
        """
        with self._lock:
            if self._exists_locked(fields):
                raise ConflictError("동일한 운동 기록이 이미 저장되어 있습니다")
            record = self._add_locked(fields)
        logger.info(f"운동 기록 저장: id={record.id} (총 {len(self._records)}건)")
        return record

    def find_by_id(self, record_id: str) -> Optional[WorkoutRecord]:
        with self._lock:
            return next((r for r in self._records if r.id == record_id), None)

    def get_all(self) -> List[WorkoutRecord]:
        """저장 순서대로 전체 기록"""
        with self._lock:
            return list(self._records)
