"""업스트림 추천 API 프록시

후보 경로를 순서대로 POST 시도:
- 2xx: 성공 (JSON 파싱 실패 시 원문 텍스트 반환)
- 404: 경로가 없는 것으로 보고 다음 후보로
- 그 외 상태: 즉시 중단하고 실패 반환 (다음 후보 시도 안 함)
- 네트워크 오류: 404와 동일하게 다음 후보로 (오류는 errors에 기록)

모든 후보가 404면 404, 어떤 후보도 응답하지 않았으면(전부 네트워크 오류) 502
"""

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

import httpx

from shared.utils import get_logger


logger = get_logger(__name__)

NO_MATCHING_PATH = "No matching upstream path"
UPSTREAM_UNREACHABLE = "Upstream unreachable"


def _reject_constant(name: str):
    # NaN, Infinity는 JSON 표준이 아님 (원문 텍스트로 반환)
    raise ValueError(f"JSON 표준이 아닌 값: {name}")


@dataclass
class ProxyResult:
    """프록시 호출 결과"""

    ok: bool
    tried: List[str]
    data: Any = None
    status: Optional[int] = None
    body: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    @property
    def transport_failure(self) -> bool:
        """모든 시도가 네트워크 오류로 끝났는지"""
        return not self.ok and bool(self.errors) and len(self.errors) == len(self.tried)


class UpstreamProxy:
    """업스트림 추천 API 클라이언트

    사용 예시:
        proxy = UpstreamProxy("https://api.example.com", ["/predict"])
        result = await proxy.post({"age": 26})
    """

    def __init__(
        self,
        base_url: str,
        candidate_paths: Sequence[str],
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: 업스트림 주소 (끝 슬래시는 제거됨)
            candidate_paths: 시도할 경로 (순서 = 우선순위)
            timeout: 시도 1회당 타임아웃 (초)
            transport: httpx transport (테스트에서 MockTransport 주입)
        """
        if not candidate_paths:
            raise ValueError("candidate_paths가 비어 있습니다.")
        self.base_url = base_url.rstrip("/")
        self.candidate_paths = tuple(candidate_paths)
        self.timeout = timeout
        self._transport = transport

    async def post(self, body: Any = None) -> ProxyResult:
        """본문을 업스트림에 전달 (호출마다 독립적으로 처음 후보부터 시도)"""
        payload = {} if body is None else body
        tried: List[str] = []
        errors: List[str] = []

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for path in self.candidate_paths:
                url = f"{self.base_url}{path}"
                tried.append(url)
                try:
                    response = await client.post(
                        url,
                        content=json.dumps(payload),
                        headers={"Content-Type": "application/json", "Accept": "application/json"},
                    )
                except httpx.HTTPError as e:
                    logger.warning(f"업스트림 연결 실패: {url} ({type(e).__name__}: {e})")
                    errors.append(f"{url}: {type(e).__name__}")
                    continue

                text = response.text
                if response.is_success:
                    logger.info(f"업스트림 응답 {response.status_code}: {url}")
                    try:
                        data = json.loads(text, parse_constant=_reject_constant)
                    except ValueError:
                        data = text
                    return ProxyResult(ok=True, data=data, status=response.status_code, tried=tried, errors=errors)

                if response.status_code == 404:
                    logger.info(f"업스트림 경로 없음 (404): {url}")
                    continue

                logger.warning(f"업스트림 실패 {response.status_code}: {url}")
                return ProxyResult(ok=False, status=response.status_code, body=text, tried=tried, errors=errors)

        if len(errors) == len(tried):
            return ProxyResult(ok=False, status=502, body=UPSTREAM_UNREACHABLE, tried=tried, errors=errors)
        return ProxyResult(ok=False, status=404, body=NO_MATCHING_PATH, tried=tried, errors=errors)
