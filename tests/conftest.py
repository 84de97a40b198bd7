"""공용 테스트 픽스처 - httpx.MockTransport 기반 Context7 클라이언트."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from context7_agent.sdk import Context7, HttpClient

TEST_API_KEY = "ctx7sk-test-key"
TEST_BASE_URL = "https://context7.test/api"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """환경 변수의 API 키/기본 URL이 테스트에 섞이지 않도록 제거."""
    monkeypatch.delenv("CONTEXT7_API_KEY", raising=False)
    monkeypatch.delenv("CONTEXT7_BASE_URL", raising=False)


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    """MockTransport가 받은 요청 목록."""
    return []


@pytest.fixture
def make_transport(requests_seen):
    """응답 핸들러로 MockTransport를 만든다. 받은 요청은 requests_seen에 기록."""

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> httpx.MockTransport:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        return httpx.MockTransport(recording_handler)

    return factory


@pytest.fixture
def make_client(make_transport):
    """고정 응답을 돌려주는 Context7 클라이언트 팩토리."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> Context7:
        return Context7(
            api_key=TEST_API_KEY,
            base_url=TEST_BASE_URL,
            transport=make_transport(handler),
        )

    return factory


@pytest.fixture
def make_http_client(make_transport):
    """커맨드 테스트용 HttpClient 팩토리."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> HttpClient:
        return HttpClient(
            base_url=TEST_BASE_URL,
            headers={"Authorization": f"Bearer {TEST_API_KEY}"},
            transport=make_transport(handler),
        )

    return factory


@pytest.fixture
def json_response():
    """항상 같은 JSON을 돌려주는 핸들러 팩토리."""

    def factory(payload, status_code: int = 200):
        return lambda request: httpx.Response(status_code, json=payload)

    return factory
