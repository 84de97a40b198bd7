"""Context7 HTTP 전송 계층.

httpx 클라이언트를 감싸서 단일 요청/응답 호출을 수행합니다.
재시도나 캐시는 하지 않으며, 실패는 모두 `Context7Error`로 변환됩니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

import httpx

from context7_agent.sdk.errors import Context7Error

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """디코딩된 응답 본문과 응답 헤더.

    Attributes:
        result: JSON 응답이면 파싱된 객체, 그 외에는 본문 문자열.
        headers: 응답 헤더 (대소문자 구분 없는 조회).
    """

    result: Any
    headers: httpx.Headers = field(default_factory=httpx.Headers)


class HttpClient:
    """Context7 API용 HTTP 클라이언트."""

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url + "/",
            headers=headers or {},
            timeout=timeout,
            transport=transport,
        )

    def request(
        self,
        method: Literal["GET"],
        path: str,
        query: dict[str, Any] | None = None,
    ) -> HttpResponse:
        """요청을 한 번 수행하고 디코딩된 응답을 반환한다.

        Args:
            method: HTTP 메서드 (Context7 API는 GET만 사용).
            path: base_url 기준 상대 경로 (예: "v2/search").
            query: 쿼리 파라미터. 값이 None인 항목은 전송하지 않습니다.

        Returns:
            HttpResponse.

        Raises:
            Context7Error: 2xx가 아닌 응답, 타임아웃, 전송 실패,
                JSON 디코딩 실패 시.
        """
        params = {k: v for k, v in (query or {}).items() if v is not None}
        logger.debug("%s %s params=%s", method, path, params)

        try:
            response = self._client.request(method, path.lstrip("/"), params=params)
        except httpx.TimeoutException as e:
            raise Context7Error("Request timed out") from e
        except httpx.RequestError as e:
            raise Context7Error(f"Request failed: {e}") from e

        logger.debug("%s %s -> %s", method, path, response.status_code)

        if not response.is_success:
            raise Context7Error(_error_message(response), response.status_code)

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return HttpResponse(result=response.json(), headers=response.headers)
            except ValueError as e:
                raise Context7Error(
                    f"Invalid JSON response: {e}", response.status_code
                ) from e

        return HttpResponse(result=response.text, headers=response.headers)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _error_message(response: httpx.Response) -> str:
    """오류 응답에서 메시지를 추출한다 (error → message → reason phrase)."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if message:
            return str(message)

    return response.reason_phrase or f"HTTP {response.status_code}"
