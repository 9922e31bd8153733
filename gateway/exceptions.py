"""Gateway 오류 분류

모든 오류는 main.py의 예외 핸들러에서 {success: false, error, ...} 형태로 변환됨
"""

from typing import Any, Dict, List, Optional


class GatewayError(Exception):
    """게이트웨이 기본 오류 (500)"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra or {}

    def to_payload(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, **self.extra}


class ValidationError(GatewayError):
    """필수 필드 누락 또는 잘못된 요청 본문 (400)"""

    status_code = 400


class ConflictError(GatewayError):
    """중복 기록 (409)"""

    status_code = 409


class NotFoundError(GatewayError):
    """기록 없음, 또는 업스트림 후보 경로 전부 404"""

    status_code = 404


class UpstreamError(GatewayError):
    """업스트림이 404 이외의 실패 상태를 반환 (상태 코드 그대로 전달, 기본 502)"""

    status_code = 502

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        tried: Optional[List[str]] = None,
    ):
        super().__init__(
            message,
            status_code=status or self.status_code,
            extra={"status": status, "tried": list(tried or [])},
        )


class TransportError(UpstreamError):
    """업스트림 연결 자체가 실패 (502)"""
