"""Context7 도구 모듈.

이 모듈은 Context7 SDK의 두 원격 작업(라이브러리 검색, 문서 조회)을
LangChain 도구로 노출합니다. 도구는 팩토리 함수로 생성되며, 설정(API 키,
기본 결과 수)을 클로저로 캡처합니다.

## 도구 흐름도

```
┌─────────────────────────────────────────────────────────────────┐
│                       LLM 도구 호출 루프                          │
├─────────────────────────────────────────────────────────────────┤
│                                                                  │
│  ┌──────────────────┐           ┌──────────────────────────┐    │
│  │ resolve_library  │──────────▶│    get_library_docs      │    │
│  │                  │ library   │                          │    │
│  │ search_library   │    ID     │ get_docs(format="txt")   │    │
│  │ (v2/search)      │           │ (v2/docs/<mode>/...)     │    │
│  └──────────────────┘           └──────────────────────────┘    │
│                                                                  │
└─────────────────────────────────────────────────────────────────┘
```

도구는 API 실패 시 예외를 던지지 않고 사람이 읽을 수 있는 오류 문자열을
반환합니다.
"""

from __future__ import annotations

import logging
from typing import Literal

from dotenv import load_dotenv
from langchain_core.tools import BaseTool, StructuredTool
from pydantic import BaseModel, Field

from context7_agent.prompts import (
    GET_LIBRARY_DOCS_DESCRIPTION,
    RESOLVE_LIBRARY_DESCRIPTION,
)
from context7_agent.sdk import Context7, Context7Error, TextDocsResponse

# ============================================================================
# 환경 설정
# ============================================================================

load_dotenv()  # .env 파일에서 CONTEXT7_API_KEY 로드

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 10
MAX_DOCS_PAGE = 10


# ============================================================================
# 입력 스키마
# ============================================================================


class ResolveLibraryInput(BaseModel):
    library_name: str = Field(
        description=(
            "Library name to search for and retrieve a Context7-compatible library ID."
        )
    )


class GetLibraryDocsInput(BaseModel):
    library_id: str = Field(
        description=(
            "Exact Context7-compatible library ID (e.g., '/mongodb/docs', "
            "'/vercel/next.js', '/vercel/next.js/v14.3.0-canary.87') retrieved from "
            "'resolve_library' or directly from the user query."
        )
    )
    mode: Literal["code", "info"] = Field(
        default="code",
        description=(
            "Documentation mode: 'code' for API references and code examples (default), "
            "'info' for conceptual guides and architectural questions."
        ),
    )
    topic: str | None = Field(
        default=None,
        description="Topic to focus documentation on (e.g., 'hooks', 'routing').",
    )
    page: int = Field(
        default=1,
        ge=1,
        le=MAX_DOCS_PAGE,
        description=(
            "Page number for pagination (start: 1). If the context is not sufficient, "
            "try page=2, page=3, ... with the same topic."
        ),
    )


# ============================================================================
# 헬퍼 함수
# ============================================================================


def _call_with_client(api_key: str | None, client: Context7 | None, operation):
    """Context7 클라이언트로 operation을 실행한다.

    client가 주어지지 않으면 호출 시점에 API 키로 클라이언트를 만들고,
    호출이 끝나면 닫습니다.
    """
    if client is not None:
        return operation(client)
    with Context7(api_key=api_key) as fresh_client:
        return operation(fresh_client)


def format_search_results(results) -> str:
    """검색 결과 목록을 Markdown 문자열로 변환한다."""
    blocks = []
    for result in results:
        lines = [
            f"- Title: {result.title or result.id}",
            f"- Context7-compatible library ID: {result.id}",
            f"- Description: {result.description or 'N/A'}",
        ]
        if result.total_snippets:
            lines.append(f"- Code Snippets: {result.total_snippets}")
        if result.trust_score is not None:
            lines.append(f"- Trust Score: {result.trust_score}")
        if result.versions:
            lines.append(f"- Versions: {', '.join(result.versions)}")
        blocks.append("\n".join(lines))

    return "\n----------\n".join(blocks)


def format_docs(library_id: str, mode: str, docs: TextDocsResponse) -> str:
    """평문 문서 응답에 페이지네이션 헤더를 붙여 반환한다."""
    pagination = docs.pagination
    header = (
        f"# Documentation: {library_id}\n\n"
        f"**Mode:** {mode}\n"
        f"**Page:** {pagination.page} of {pagination.total_pages}\n"
        f"**Total Tokens:** {docs.total_tokens}\n"
    )
    if pagination.has_next:
        header += (
            f"**Next:** call again with page={pagination.page + 1} "
            "for more documentation\n"
        )
    return f"{header}\n---\n\n{docs.content}"


# ============================================================================
# 라이브러리 검색 도구
# ============================================================================


def resolve_library(
    api_key: str | None = None,
    *,
    client: Context7 | None = None,
) -> BaseTool:
    """라이브러리 이름을 Context7 라이브러리 ID로 해석하는 도구를 만든다.

    Args:
        api_key: Context7 API 키. 생략하면 `CONTEXT7_API_KEY` 환경 변수 사용.
        client: 미리 생성한 클라이언트 (지정 시 api_key 무시).

    Returns:
        `resolve_library` 이름의 LangChain 도구. 결과는 Markdown 문자열.

    Example:
        >>> tool = resolve_library()
        >>> tool.invoke({"library_name": "react"})
    """

    def _resolve_library(library_name: str) -> str:
        try:
            response = _call_with_client(
                api_key, client, lambda c: c.search_library(library_name)
            )
        except Context7Error as e:
            logger.warning("resolve_library failed for %r: %s", library_name, e)
            return (
                f"Library search error: {e.message}\n"
                "Check your API key and try again, or try a different search term."
            )

        if not response.results:
            return (
                f"No libraries found matching '{library_name}'.\n"
                "Try a different search term or check the library name."
            )

        return (
            f"Found {len(response.results)} library match(es) for '{library_name}':\n\n"
            + format_search_results(response.results)
        )

    return StructuredTool.from_function(
        func=_resolve_library,
        name="resolve_library",
        description=RESOLVE_LIBRARY_DESCRIPTION,
        args_schema=ResolveLibraryInput,
    )


# ============================================================================
# 문서 조회 도구
# ============================================================================


def get_library_docs(
    api_key: str | None = None,
    *,
    default_max_results: int = DEFAULT_MAX_RESULTS,
    client: Context7 | None = None,
) -> BaseTool:
    """라이브러리 문서를 가져오는 도구를 만든다.

    문서는 항상 평문(format="txt")으로 요청하며, 페이지당 결과 수는
    `default_max_results`로 고정됩니다.

    Args:
        api_key: Context7 API 키. 생략하면 `CONTEXT7_API_KEY` 환경 변수 사용.
        default_max_results: 페이지당 결과 수 (limit). 기본값: 10.
        client: 미리 생성한 클라이언트 (지정 시 api_key 무시).

    Returns:
        `get_library_docs` 이름의 LangChain 도구. 결과는 Markdown 문자열.

    Example:
        >>> tool = get_library_docs(default_max_results=5)
        >>> tool.invoke({"library_id": "/facebook/react", "topic": "hooks"})
    """

    def _get_library_docs(
        library_id: str,
        mode: Literal["code", "info"] = "code",
        topic: str | None = None,
        page: int = 1,
    ) -> str:
        try:
            docs = _call_with_client(
                api_key,
                client,
                lambda c: c.get_docs(
                    library_id,
                    mode=mode,
                    format="txt",
                    topic=topic,
                    page=page,
                    limit=default_max_results,
                ),
            )
        except Context7Error as e:
            logger.warning("get_library_docs failed for %r: %s", library_id, e)
            return (
                f"Library docs error ({library_id}): {e.message}\n"
                "Check that the library ID is correct (use resolve_library first)."
            )

        if not docs.content.strip():
            return (
                f"Documentation not found or not finalized for '{library_id}'. "
                "Try a different topic or mode, or another library ID."
            )

        return format_docs(library_id, mode, docs)

    return StructuredTool.from_function(
        func=_get_library_docs,
        name="get_library_docs",
        description=GET_LIBRARY_DOCS_DESCRIPTION,
        args_schema=GetLibraryDocsInput,
    )


def context7_tools(
    api_key: str | None = None,
    *,
    default_max_results: int = DEFAULT_MAX_RESULTS,
    client: Context7 | None = None,
) -> list[BaseTool]:
    """두 Context7 도구를 같은 설정으로 생성해 반환한다."""
    return [
        resolve_library(api_key, client=client),
        get_library_docs(
            api_key, default_max_results=default_max_results, client=client
        ),
    ]
