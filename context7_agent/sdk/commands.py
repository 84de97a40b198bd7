"""Context7 API 커맨드 모듈.

각 커맨드는 하나의 원격 작업(요청 구성 + 응답 검증/변환)을 캡슐화하고,
`exec(http_client)`로 실행됩니다.

## 커맨드 흐름

```
┌─────────────────────────────────────────────────────────────────┐
│  Command.exec(http_client)                                       │
├─────────────────────────────────────────────────────────────────┤
│   1. 인자 검증 (생성 시점)          → Context7Error              │
│   2. http_client.request(GET, endpoint, query)                   │
│   3. parse(response)                                             │
│      - SearchLibraryCommand: results 목록 검증                   │
│      - GetDocsCommand: format/mode에 따라 응답 타입 판별          │
└─────────────────────────────────────────────────────────────────┘
```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from context7_agent.sdk.errors import Context7Error
from context7_agent.sdk.http import HttpClient, HttpResponse
from context7_agent.sdk.types import (
    APIResponseMetadata,
    CodeDocsResponse,
    CodeSnippet,
    DocsFormat,
    DocsMode,
    DocsResponse,
    GetDocsOptions,
    InfoDocsResponse,
    InfoSnippet,
    Pagination,
    SearchLibraryResponse,
    SearchResult,
    TextDocsResponse,
)

T = TypeVar("T")

# 평문 응답의 페이지네이션 헤더
PAGINATION_HEADERS = {
    "page": "x-context7-page",
    "limit": "x-context7-limit",
    "totalPages": "x-context7-total-pages",
    "hasNext": "x-context7-has-next",
    "hasPrev": "x-context7-has-prev",
}
TOTAL_TOKENS_HEADER = "x-context7-total-tokens"


class Command(ABC, Generic[T]):
    """원격 작업 하나를 나타내는 기반 클래스."""

    def __init__(self, endpoint: str, query: dict[str, Any] | None = None):
        self.endpoint = endpoint
        self.query = query or {}

    def exec(self, client: HttpClient) -> T:
        response = client.request("GET", self.endpoint, self.query)
        return self.parse(response)

    @abstractmethod
    def parse(self, response: HttpResponse) -> T:
        """응답을 검증하고 타입 객체로 변환한다."""


# ============================================================================
# 라이브러리 검색
# ============================================================================


class SearchLibraryCommand(Command[SearchLibraryResponse]):
    """라이브러리 이름으로 Context7 라이브러리를 검색한다."""

    def __init__(self, query: str):
        super().__init__("v2/search", {"query": query})

    def parse(self, response: HttpResponse) -> SearchLibraryResponse:
        data = response.result
        if not isinstance(data, dict):
            raise Context7Error("Unexpected search response: expected a JSON object")

        results = data.get("results") or []
        if not isinstance(results, list):
            raise Context7Error("Unexpected search response: 'results' is not a list")

        parsed = []
        for item in results:
            if not isinstance(item, dict) or not isinstance(item.get("id"), str):
                raise Context7Error(
                    "Unexpected search response: result without a string 'id'"
                )
            parsed.append(SearchResult.from_dict(item))

        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise Context7Error("Unexpected search response: 'metadata' is not an object")

        return SearchLibraryResponse(
            results=parsed,
            metadata=APIResponseMetadata(
                authentication=metadata.get("authentication", "none")
            ),
        )


# ============================================================================
# 문서 조회
# ============================================================================


class GetDocsCommand(Command[DocsResponse]):
    """라이브러리 문서를 페이지 단위로 조회한다.

    Args:
        library_id: "/owner/repo" 또는 "/owner/repo/version" 형식의 식별자.
            앞의 슬래시는 생략 가능.
        options: 조회 옵션. 생략하면 mode=code, format=json.

    Raises:
        Context7Error: 식별자 형식, mode, format, page, limit이 잘못된 경우.
    """

    def __init__(self, library_id: str, options: GetDocsOptions | None = None):
        options = options or GetDocsOptions()

        self.mode = _coerce_enum(DocsMode, options.mode, "mode")
        self.format = _coerce_enum(DocsFormat, options.format, "format")
        self.limit = _check_positive(options.limit, "limit")
        page = _check_positive(options.page, "page")

        owner, repo, version = _split_library_id(library_id)
        version = options.version or version

        # 엔드포인트: v2/docs/<mode>/<owner>/<repo>[/<version>]
        parts = ["v2", "docs", self.mode.value, owner, repo]
        if version:
            parts.append(version)

        super().__init__(
            "/".join(parts),
            {
                "type": self.format.value,
                "topic": options.topic or None,
                "page": page,
                "limit": self.limit,
            },
        )

    def parse(self, response: HttpResponse) -> DocsResponse:
        if self.format is DocsFormat.TXT:
            return self._parse_text(response)

        data = response.result
        if not isinstance(data, dict):
            raise Context7Error("Unexpected docs response: expected a JSON object")

        snippets = data.get("snippets") or []
        if not isinstance(snippets, list):
            raise Context7Error("Unexpected docs response: 'snippets' is not a list")

        pagination = self._pagination(_as_object(data.get("pagination"), "pagination"))
        total_tokens = _as_int(data.get("totalTokens"), "totalTokens")

        snippet_cls = InfoSnippet if self.mode is DocsMode.INFO else CodeSnippet
        parsed = []
        for snippet in snippets:
            if not isinstance(snippet, dict):
                raise Context7Error("Unexpected docs response: snippet is not an object")
            try:
                parsed.append(snippet_cls.from_dict(snippet))
            except (TypeError, ValueError) as e:
                raise Context7Error(f"Unexpected docs response: {e}") from e

        if self.mode is DocsMode.INFO:
            return InfoDocsResponse(
                snippets=parsed, pagination=pagination, total_tokens=total_tokens
            )
        return CodeDocsResponse(
            snippets=parsed, pagination=pagination, total_tokens=total_tokens
        )

    def _pagination(self, data: dict[str, Any]) -> Pagination:
        try:
            return Pagination.from_dict(data, default_limit=self.limit)
        except (TypeError, ValueError) as e:
            raise Context7Error(f"Unexpected docs response: invalid pagination ({e})") from e

    def _parse_text(self, response: HttpResponse) -> TextDocsResponse:
        """평문 응답을 TextDocsResponse로 변환한다.

        본문이 문자열이면 페이지네이션은 헤더에서 읽고, JSON 본문에
        `content`가 있으면 본문의 값이 헤더보다 우선합니다.
        """
        header_pagination = _pagination_from_headers(response.headers)
        header_tokens = response.headers.get(TOTAL_TOKENS_HEADER, "").strip()
        if not header_tokens.isdigit():
            header_tokens = None

        data = response.result
        if isinstance(data, str):
            content = data
            pagination_data: dict[str, Any] = header_pagination
            total_tokens = header_tokens
        elif isinstance(data, dict):
            content = data.get("content", "")
            if not isinstance(content, str):
                raise Context7Error("Unexpected docs response: 'content' is not a string")
            pagination_data = {
                **header_pagination,
                **_as_object(data.get("pagination"), "pagination"),
            }
            total_tokens = data.get("totalTokens", header_tokens)
        else:
            raise Context7Error("Unexpected docs response: expected text content")

        return TextDocsResponse(
            content=content,
            pagination=self._pagination(pagination_data),
            total_tokens=_as_int(total_tokens, "totalTokens"),
        )


# ============================================================================
# 헬퍼 함수
# ============================================================================


def _split_library_id(library_id: str) -> tuple[str, str, str | None]:
    cleaned = library_id.strip().strip("/")
    parts = [p for p in cleaned.split("/") if p]
    if len(parts) < 2:
        raise Context7Error(
            f"Invalid library ID: {library_id!r}. "
            "Expected format: /owner/repo or /owner/repo/version"
        )
    version = "/".join(parts[2:]) or None
    return parts[0], parts[1], version


def _coerce_enum(enum_cls, value, name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise Context7Error(f"Invalid {name}: {value!r}. Expected one of: {allowed}") from None


def _check_positive(value: int | None, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise Context7Error(f"Invalid {name}: {value!r}. Must be a positive integer")
    return value


def _as_object(value: Any, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise Context7Error(f"Unexpected docs response: '{name}' is not an object")
    return value


def _as_int(value: Any, name: str) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise Context7Error(
            f"Unexpected docs response: '{name}' is not a number: {value!r}"
        ) from None


def _pagination_from_headers(headers) -> dict[str, Any]:
    """x-context7-* 헤더에서 페이지네이션 값을 읽는다. 숫자가 아닌 값은 무시."""
    values: dict[str, Any] = {}
    for key, header in PAGINATION_HEADERS.items():
        raw = headers.get(header)
        if raw is None:
            continue
        if key in ("hasNext", "hasPrev"):
            values[key] = raw.strip().lower() == "true"
        elif raw.strip().isdigit():
            values[key] = int(raw)
    return values
