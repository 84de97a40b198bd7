"""Context7 문서 검색 API용 클라이언트 SDK.

사용법:
    from context7_agent.sdk import Context7

    client = Context7()  # CONTEXT7_API_KEY 환경 변수 사용
    libraries = client.search_library("react")
    docs = client.get_docs(libraries.results[0].id, mode="info", format="txt")
"""

from context7_agent.sdk.client import (
    API_KEY_PREFIX,
    DEFAULT_BASE_URL,
    Context7,
)
from context7_agent.sdk.commands import (
    Command,
    GetDocsCommand,
    SearchLibraryCommand,
)
from context7_agent.sdk.errors import Context7Error
from context7_agent.sdk.http import HttpClient, HttpResponse
from context7_agent.sdk.types import (
    APIResponseMetadata,
    CodeDocsResponse,
    CodeExample,
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

__all__ = [
    "Context7",
    "Context7Error",
    "DEFAULT_BASE_URL",
    "API_KEY_PREFIX",
    "HttpClient",
    "HttpResponse",
    "Command",
    "SearchLibraryCommand",
    "GetDocsCommand",
    "SearchLibraryResponse",
    "SearchResult",
    "APIResponseMetadata",
    "CodeDocsResponse",
    "InfoDocsResponse",
    "TextDocsResponse",
    "DocsResponse",
    "CodeSnippet",
    "CodeExample",
    "InfoSnippet",
    "Pagination",
    "GetDocsOptions",
    "DocsMode",
    "DocsFormat",
]
