"""게이트웨이 ASGI 미들웨어

- PathNormalizeMiddleware: 연속된 슬래시(//)를 하나로 합침 (라우팅 이전)
- OriginAllowListMiddleware: Origin 허용 목록 기반 CORS 처리

등록 순서: PathNormalize가 가장 바깥에 위치해야 preflight 경로도 정규화됨
"""

import re
from typing import Iterable, Optional, Sequence

from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send


ALLOW_METHODS: Sequence[str] = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")
ALLOW_HEADERS: Sequence[str] = ("Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization")
PREFLIGHT_MAX_AGE = 86400

_MULTI_SLASH = re.compile(r"/{2,}")
_MULTI_SLASH_BYTES = re.compile(rb"/{2,}")
_TRAILING_SLASH = re.compile(r"/+$")


def normalize_origin(origin: Optional[str]) -> str:
    """Origin 비교용 정규화 (공백 제거, 끝 슬래시 제거, 소문자)"""
    return _TRAILING_SLASH.sub("", (origin or "").strip()).lower()


def collapse_slashes(path: str) -> str:
    """'//api//health' -> '/api/health'"""
    return _MULTI_SLASH.sub("/", path)


class PathNormalizeMiddleware:
    """요청 경로의 중복 슬래시 정리"""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket"):
            path = scope.get("path", "")
            collapsed = collapse_slashes(path)
            if collapsed != path:
                scope = dict(scope)
                scope["path"] = collapsed
                raw_path = scope.get("raw_path")
                if raw_path:
                    scope["raw_path"] = _MULTI_SLASH_BYTES.sub(b"/", raw_path)
        await self.app(scope, receive, send)


class OriginAllowListMiddleware:
    """Origin 허용 목록 CORS 미들웨어

    - Origin 헤더 없음 (curl, 헬스 체크, 서버 간 호출): 그대로 통과, CORS 헤더 없음
    - 허용된 Origin: 요청 Origin을 그대로 Access-Control-Allow-Origin에 반영
    - 허용되지 않은 Origin: CORS 헤더만 생략 (차단은 브라우저가 수행)
    - OPTIONS 요청: 경로와 허용 여부에 관계없이 204로 종료 (라우터로 전달하지 않음)
    """

    def __init__(
        self,
        app: ASGIApp,
        allowed_origins: Iterable[str] = (),
        allow_methods: Sequence[str] = ALLOW_METHODS,
        allow_headers: Sequence[str] = ALLOW_HEADERS,
        max_age: int = PREFLIGHT_MAX_AGE,
    ):
        self.app = app
        self.allowed_origins = frozenset(
            normalized for normalized in map(normalize_origin, allowed_origins) if normalized
        )
        self.preflight_headers = {
            "Access-Control-Allow-Methods": ",".join(allow_methods),
            "Access-Control-Allow-Headers": ",".join(allow_headers),
            "Access-Control-Max-Age": str(max_age),
        }

    def is_allowed(self, origin: Optional[str]) -> bool:
        if not origin:
            return True
        return normalize_origin(origin) in self.allowed_origins

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin")
        cors_headers = {}
        if origin and self.is_allowed(origin):
            cors_headers = {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}

        if scope["method"] == "OPTIONS":
            if cors_headers:
                cors_headers.update(self.preflight_headers)
            response = Response(status_code=204, headers=cors_headers)
            await response(scope, receive, send)
            return

        if not cors_headers:
            await self.app(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers["Access-Control-Allow-Origin"] = origin
                headers.add_vary_header("Origin")
            await send(message)

        await self.app(scope, receive, send_with_cors)
