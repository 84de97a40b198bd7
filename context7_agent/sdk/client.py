"""Context7 API 클라이언트."""

from __future__ import annotations

import logging
import os

import httpx

from context7_agent import __version__
from context7_agent.sdk.commands import GetDocsCommand, SearchLibraryCommand
from context7_agent.sdk.errors import Context7Error
from context7_agent.sdk.http import HttpClient
from context7_agent.sdk.types import (
    DocsFormat,
    DocsMode,
    DocsResponse,
    GetDocsOptions,
    SearchLibraryResponse,
)

logger = logging.getLogger(__name__)

# ============================================================================
# 환경 설정
# ============================================================================

DEFAULT_BASE_URL = "https://context7.com/api"
DEFAULT_TIMEOUT = 60.0
API_KEY_PREFIX = "ctx7sk"

API_KEY_ENV = "CONTEXT7_API_KEY"
BASE_URL_ENV = "CONTEXT7_BASE_URL"


class Context7:
    """Context7 문서 검색 API 클라이언트.

    Args:
        api_key: Context7 API 키. 생략하면 `CONTEXT7_API_KEY` 환경 변수 사용.
        base_url: API 기본 URL. 생략하면 `CONTEXT7_BASE_URL` 환경 변수,
            그것도 없으면 https://context7.com/api.
        timeout: 요청 타임아웃(초).
        transport: httpx 전송 계층 (테스트용 MockTransport 주입 등).

    Raises:
        Context7Error: API 키를 찾을 수 없는 경우.

    Example:
        >>> client = Context7(api_key="ctx7sk-...")
        >>> client.search_library("react").results[0].id
        '/facebook/react'
        >>> docs = client.get_docs("/facebook/react", format="txt", topic="hooks")
        >>> docs.pagination.has_next
        True
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        api_key = api_key or os.environ.get(API_KEY_ENV)
        if not api_key:
            raise Context7Error(
                "API key is required. Pass api_key or set the "
                f"{API_KEY_ENV} environment variable."
            )
        if not api_key.startswith(API_KEY_PREFIX):
            logger.warning("Context7 API key should start with '%s'", API_KEY_PREFIX)

        self.http_client = HttpClient(
            base_url=base_url or os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL,
            headers={
                "Authorization": f"Bearer {api_key}",
                "User-Agent": f"context7-agent/{__version__}",
            },
            timeout=timeout,
            transport=transport,
        )

    def search_library(self, query: str) -> SearchLibraryResponse:
        """이름으로 라이브러리를 검색한다.

        Args:
            query: 라이브러리 이름 (예: "react", "fastapi").

        Returns:
            SearchLibraryResponse. 일치 항목이 없으면 results가 빈 리스트.
        """
        return SearchLibraryCommand(query).exec(self.http_client)

    def get_docs(
        self,
        library_id: str,
        *,
        mode: DocsMode | str = DocsMode.CODE,
        format: DocsFormat | str = DocsFormat.JSON,
        topic: str | None = None,
        version: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> DocsResponse:
        """라이브러리 문서를 조회한다.

        Args:
            library_id: 라이브러리 식별자 (예: "/facebook/react").
            mode: "code" (API 레퍼런스/코드 예제) 또는 "info" (개념 가이드).
            format: "json" (구조화 스니펫) 또는 "txt" (평문).
            topic: 주제 필터 (예: "hooks").
            version: 라이브러리 버전.
            page: 페이지 번호 (1부터).
            limit: 페이지당 결과 수.

        Returns:
            format이 "txt"이면 TextDocsResponse,
            "json"이면 mode에 따라 CodeDocsResponse 또는 InfoDocsResponse.
        """
        options = GetDocsOptions(
            mode=mode,
            format=format,
            topic=topic,
            version=version,
            page=page,
            limit=limit,
        )
        return GetDocsCommand(library_id, options).exec(self.http_client)

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self) -> "Context7":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
