"""Tests for origin allow-list CORS handling and path normalization."""

import pytest

from gateway.middleware import collapse_slashes, normalize_origin

from .conftest import ALLOWED_ORIGIN


ALLOW_ORIGIN = "access-control-allow-origin"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://YukFit.netlify.app/", "https://yukfit.netlify.app"),
        ("  http://localhost:5173//  ", "http://localhost:5173"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_origin(raw, expected):
    assert normalize_origin(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("//api//health", "/api/health"),
        ("/api/saved-workouts///42", "/api/saved-workouts/42"),
        ("/api/health", "/api/health"),
    ],
)
def test_collapse_slashes(raw, expected):
    assert collapse_slashes(raw) == expected


class TestAllowedOrigin:

    @pytest.mark.parametrize(
        "origin",
        [ALLOWED_ORIGIN, "https://YUKFIT.netlify.app", "https://yukfit.netlify.app/", "http://localhost:5173"],
    )
    def test_allowed_origin_gets_cors_headers(self, client, origin):
        response = client.get("/api/health", headers={"Origin": origin})

        assert response.status_code == 200
        assert response.headers[ALLOW_ORIGIN] == origin
        assert "Origin" in response.headers["vary"]
        assert "access-control-allow-credentials" not in response.headers

    def test_allowed_origin_on_error_response(self, client):
        response = client.get("/api/saved-workouts/missing", headers={"Origin": ALLOWED_ORIGIN})

        assert response.status_code == 404
        assert response.headers[ALLOW_ORIGIN] == ALLOWED_ORIGIN

    def test_preflight_for_allowed_origin(self, client):
        response = client.options(
            "/api/recommend",
            headers={"Origin": ALLOWED_ORIGIN, "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 204
        assert response.content == b""
        assert response.headers[ALLOW_ORIGIN] == ALLOWED_ORIGIN
        assert response.headers["access-control-allow-methods"] == "GET,HEAD,POST,PUT,PATCH,DELETE,OPTIONS"
        assert response.headers["access-control-allow-headers"] == (
            "Origin,X-Requested-With,Content-Type,Accept,Authorization"
        )
        assert response.headers["access-control-max-age"] == "86400"


class TestRejectedOrigin:

    @pytest.mark.parametrize("method", ["GET", "POST"])
    def test_rejected_origin_gets_no_cors_headers(self, client, method, sample_workout):
        url = "/api/health" if method == "GET" else "/api/save"
        response = client.request(
            method, url, json=sample_workout, headers={"Origin": "https://evil.example"}
        )

        assert response.status_code in (200, 201)
        assert ALLOW_ORIGIN not in response.headers
        assert not any(h.startswith("access-control-") for h in response.headers)

    def test_preflight_for_rejected_origin_is_still_204(self, client):
        response = client.options(
            "/api/recommend",
            headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 204
        assert not any(h.startswith("access-control-") for h in response.headers)


class TestNoOrigin:

    @pytest.mark.parametrize("path", ["/api/health", "/api/saved-workouts"])
    def test_requests_without_origin_are_admitted(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        assert ALLOW_ORIGIN not in response.headers


class TestPreflightAnyPath:

    @pytest.mark.parametrize("path", ["/api/recommend", "/not/a/route", "//api//save"])
    def test_preflight_never_reaches_router(self, client, upstream, path):
        response = client.options(
            f"http://testserver{path}",
            headers={"Origin": ALLOWED_ORIGIN, "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 204
        assert upstream.requests == []
