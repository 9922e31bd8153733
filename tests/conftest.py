"""
Test fixtures for the gateway.

The upstream recommendation API is simulated with httpx.MockTransport so the
proxy can be exercised offline and deterministically.
"""

from typing import Any, Dict, List, Optional, Tuple, Type

import httpx
import pytest
from fastapi.testclient import TestClient

from gateway.config import GatewaySettings
from gateway.main import create_app
from gateway.services import UpstreamProxy, WorkoutRecordStore


UPSTREAM_BASE = "http://upstream.test"
ALLOWED_ORIGIN = "https://yukfit.netlify.app"


# ---------------------------------------------------------------------------
# Upstream stub
# ---------------------------------------------------------------------------


class UpstreamStub:
    """Fake upstream: unknown paths answer 404, configured paths answer as set."""

    def __init__(self):
        self._routes: Dict[str, Tuple[str, Any]] = {}
        self.requests: List[httpx.Request] = []

    def respond(
        self,
        path: str,
        status: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
    ) -> None:
        kwargs: Dict[str, Any] = {"text": text} if text is not None else {"json": json_body}
        self._routes[path] = ("response", (status, kwargs))

    def fail(self, path: str, exc_type: Type[httpx.HTTPError] = httpx.ConnectError) -> None:
        self._routes[path] = ("error", exc_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        kind, value = self._routes.get(request.url.path, ("response", (404, {"text": "Not Found"})))
        if kind == "error":
            raise value("connection refused", request=request)
        status, kwargs = value
        return httpx.Response(status, **kwargs)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


def make_settings(**overrides: Any) -> GatewaySettings:
    values: Dict[str, Any] = {
        "python_api": f"{UPSTREAM_BASE}/",
        "python_recommend_path": "",
        "allowed_origins": "https://YukFit.netlify.app/ , http://localhost:5173",
        "upstream_timeout": 1.0,
    }
    values.update(overrides)
    return GatewaySettings(_env_file=None, **values)


def make_client(settings: GatewaySettings, upstream: UpstreamStub) -> TestClient:
    proxy = UpstreamProxy(
        base_url=settings.upstream_base_url,
        candidate_paths=settings.recommend_paths,
        timeout=settings.upstream_timeout,
        transport=upstream.transport,
    )
    app = create_app(settings=settings, record_store=WorkoutRecordStore(), upstream_proxy=proxy)
    return TestClient(app)


@pytest.fixture
def gateway_settings() -> GatewaySettings:
    return make_settings()


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def client(gateway_settings: GatewaySettings, upstream: UpstreamStub) -> TestClient:
    """Fresh app per test: empty record store, stubbed upstream."""
    return make_client(gateway_settings, upstream)


@pytest.fixture
def client_factory(upstream: UpstreamStub):
    """Build a client with settings overrides (e.g. python_recommend_path)."""

    def _factory(**overrides: Any) -> TestClient:
        return make_client(make_settings(**overrides), upstream)

    return _factory


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_workout() -> Dict[str, Any]:
    return {
        "age": 26,
        "gender": "female",
        "height": 165,
        "weight": 55,
        "bmi": 20.2,
        "goal": "fat_loss",
    }
