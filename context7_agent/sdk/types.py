"""Context7 API 응답 및 옵션 타입 모듈.

와이어 포맷은 camelCase(JSON), 파이썬 쪽은 snake_case 필드를 사용합니다.
각 응답 타입은 `from_dict()`로 API 페이로드에서 생성되며, 누락된 필드는
기본값으로 채워집니다.

## 응답 타입 판별

```
┌──────────────┬──────────────────┬──────────────────┐
│   format     │    mode=code     │    mode=info     │
├──────────────┼──────────────────┼──────────────────┤
│ json         │ CodeDocsResponse │ InfoDocsResponse │
│ txt          │ TextDocsResponse │ TextDocsResponse │
└──────────────┴──────────────────┴──────────────────┘
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union

# 페이지네이션 정보가 없을 때 사용하는 기본 limit
DEFAULT_PAGE_LIMIT = 10


class DocsMode(str, Enum):
    """문서 조회 모드."""

    CODE = "code"  # API 레퍼런스 및 코드 예제
    INFO = "info"  # 개념 가이드 및 서술형 문서


class DocsFormat(str, Enum):
    """문서 응답 포맷."""

    JSON = "json"
    TXT = "txt"


# ============================================================================
# 라이브러리 검색
# ============================================================================


@dataclass(frozen=True)
class SearchResult:
    """라이브러리 검색 결과 한 건.

    Attributes:
        id: 라이브러리 식별자 (예: "/facebook/react").
        title: 라이브러리 표시 이름.
        description: 라이브러리 설명.
        branch: 인덱싱된 브랜치.
        last_update_date: 마지막 갱신 일자.
        state: 인덱싱 상태 문자열 (예: "finalized", "processing").
        total_tokens: 전체 문서 토큰 수.
        total_snippets: 전체 스니펫 수.
        stars: GitHub 스타 수 (선택).
        trust_score: 신뢰 점수 (선택).
        benchmark_score: 벤치마크 점수 (선택).
        versions: 인덱싱된 버전 목록.
    """

    id: str
    title: str = ""
    description: str = ""
    branch: str = ""
    last_update_date: str = ""
    state: str = "initial"
    total_tokens: int = 0
    total_snippets: int = 0
    stars: int | None = None
    trust_score: float | None = None
    benchmark_score: float | None = None
    versions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchResult":
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            description=data.get("description") or "",
            branch=data.get("branch") or "",
            last_update_date=data.get("lastUpdateDate") or "",
            state=data.get("state") or "initial",
            total_tokens=data.get("totalTokens") or 0,
            total_snippets=data.get("totalSnippets") or 0,
            stars=data.get("stars"),
            trust_score=data.get("trustScore"),
            benchmark_score=data.get("benchmarkScore"),
            versions=list(data.get("versions") or []),
        )


@dataclass(frozen=True)
class APIResponseMetadata:
    """검색 응답 메타데이터."""

    authentication: Literal["none", "personal", "team"] = "none"


@dataclass(frozen=True)
class SearchLibraryResponse:
    """라이브러리 검색 응답."""

    results: list[SearchResult]
    metadata: APIResponseMetadata = field(default_factory=APIResponseMetadata)


# ============================================================================
# 문서 조회
# ============================================================================


@dataclass(frozen=True)
class Pagination:
    """문서 응답의 페이지네이션 메타데이터."""

    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT
    total_pages: int = 1
    has_next: bool = False
    has_prev: bool = False

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], default_limit: int | None = None
    ) -> "Pagination":
        """숫자 필드를 int로 변환한다. 변환할 수 없으면 ValueError/TypeError."""
        return cls(
            page=int(data.get("page") or 1),
            limit=int(data.get("limit") or default_limit or DEFAULT_PAGE_LIMIT),
            total_pages=int(data.get("totalPages") or 1),
            has_next=bool(data.get("hasNext", False)),
            has_prev=bool(data.get("hasPrev", False)),
        )


@dataclass(frozen=True)
class CodeExample:
    """스니펫 안의 코드 예제 하나."""

    language: str
    code: str


@dataclass(frozen=True)
class CodeSnippet:
    """코드 문서 스니펫 (mode=code, format=json)."""

    code_title: str = ""
    code_description: str = ""
    code_language: str = ""
    code_tokens: int = 0
    code_id: str = ""
    page_title: str = ""
    code_list: list[CodeExample] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CodeSnippet":
        language = data.get("codeLanguage") or ""
        code_list = []
        for entry in data.get("codeList") or []:
            # 문자열만 오는 경우 스니펫 언어를 그대로 사용
            if isinstance(entry, str):
                code_list.append(CodeExample(language=language, code=entry))
            elif not isinstance(entry, dict):
                raise TypeError(f"codeList entry must be a string or an object, got {entry!r}")
            else:
                code_list.append(
                    CodeExample(
                        language=entry.get("language") or language,
                        code=entry.get("code") or "",
                    )
                )
        return cls(
            code_title=data.get("codeTitle") or "",
            code_description=data.get("codeDescription") or "",
            code_language=language,
            code_tokens=data.get("codeTokens") or 0,
            code_id=str(data.get("codeId") or ""),
            page_title=data.get("pageTitle") or "",
            code_list=code_list,
        )


@dataclass(frozen=True)
class InfoSnippet:
    """정보 문서 스니펫 (mode=info, format=json)."""

    content: str = ""
    content_tokens: int = 0
    page_id: str | None = None
    breadcrumb: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InfoSnippet":
        return cls(
            content=data.get("content") or "",
            content_tokens=data.get("contentTokens") or 0,
            page_id=data.get("pageId"),
            breadcrumb=data.get("breadcrumb"),
        )


@dataclass(frozen=True)
class CodeDocsResponse:
    """코드 문서 응답."""

    snippets: list[CodeSnippet]
    pagination: Pagination
    total_tokens: int


@dataclass(frozen=True)
class InfoDocsResponse:
    """정보 문서 응답."""

    snippets: list[InfoSnippet]
    pagination: Pagination
    total_tokens: int


@dataclass(frozen=True)
class TextDocsResponse:
    """평문 문서 응답 (format=txt)."""

    content: str
    pagination: Pagination
    total_tokens: int


DocsResponse = Union[CodeDocsResponse, InfoDocsResponse, TextDocsResponse]


@dataclass(frozen=True)
class GetDocsOptions:
    """문서 조회 옵션.

    Attributes:
        mode: "code" (기본) 또는 "info".
        format: "json" (기본) 또는 "txt".
        topic: 특정 주제로 결과를 좁힐 때 사용 (예: "hooks").
        version: 라이브러리 버전. 식별자에 포함된 버전보다 우선합니다.
        page: 페이지 번호 (1부터 시작).
        limit: 페이지당 결과 수.
    """

    mode: DocsMode | str = DocsMode.CODE
    format: DocsFormat | str = DocsFormat.JSON
    topic: str | None = None
    version: str | None = None
    page: int | None = None
    limit: int | None = None
