"""Context7 클라이언트 테스트 - MockTransport로 HTTP 대체."""

from __future__ import annotations

import logging

import httpx
import pytest

from context7_agent.sdk import (
    CodeDocsResponse,
    Context7,
    Context7Error,
    InfoDocsResponse,
    SearchLibraryResponse,
    TextDocsResponse,
)

REACT_RESULT = {
    "id": "/facebook/react",
    "title": "React",
    "description": "A JavaScript library for building user interfaces",
    "branch": "main",
    "lastUpdateDate": "2023-01-01",
    "state": "indexed",
    "totalTokens": 1000,
    "totalSnippets": 10,
}

CODE_SNIPPET = {
    "codeTitle": "test",
    "codeDescription": "test",
    "codeLanguage": "ts",
    "codeTokens": 10,
    "codeId": "1",
    "pageTitle": "Page",
    "codeList": ["code"],
}


class TestConstructor:
    """생성자 및 API 키 설정 테스트."""

    def test_with_api_key(self):
        """API 키를 직접 전달해 생성."""
        client = Context7(api_key="ctx7sk-abc")
        assert client is not None

    def test_from_environment(self, monkeypatch, make_transport, requests_seen, json_response):
        """CONTEXT7_API_KEY 환경 변수 사용."""
        monkeypatch.setenv("CONTEXT7_API_KEY", "ctx7sk-from-env")
        client = Context7(transport=make_transport(json_response({"results": []})))
        client.search_library("react")

        assert requests_seen[0].headers["Authorization"] == "Bearer ctx7sk-from-env"

    def test_missing_api_key_raises(self):
        """인자/환경 변수 모두 없으면 Context7Error."""
        with pytest.raises(Context7Error, match="API key is required"):
            Context7()
        with pytest.raises(Context7Error):
            Context7(api_key="")

    def test_explicit_key_wins_over_env(self, monkeypatch, make_transport, requests_seen, json_response):
        """생성자 인자가 환경 변수보다 우선."""
        monkeypatch.setenv("CONTEXT7_API_KEY", "ctx7sk-from-env")
        client = Context7(
            api_key="ctx7sk-custom-key",
            transport=make_transport(json_response({"results": []})),
        )
        client.search_library("react")

        assert requests_seen[0].headers["Authorization"] == "Bearer ctx7sk-custom-key"

    def test_key_prefix_warning(self, caplog):
        """ctx7sk로 시작하지 않는 키는 경고만 남기고 허용."""
        with caplog.at_level(logging.WARNING, logger="context7_agent.sdk.client"):
            client = Context7(api_key="dummy-key")

        assert client is not None
        assert "ctx7sk" in caplog.text

    def test_base_url_from_environment(self, monkeypatch, make_transport, requests_seen, json_response):
        """CONTEXT7_BASE_URL 환경 변수로 기본 URL 변경."""
        monkeypatch.setenv("CONTEXT7_BASE_URL", "https://self-hosted.example/api")
        client = Context7(
            api_key="ctx7sk-abc",
            transport=make_transport(json_response({"results": []})),
        )
        client.search_library("react")

        assert str(requests_seen[0].url).startswith(
            "https://self-hosted.example/api/v2/search"
        )

    def test_user_agent_header(self, make_client, requests_seen, json_response):
        """User-Agent 헤더에 패키지 버전 포함."""
        client = make_client(json_response({"results": []}))
        client.search_library("react")

        assert requests_seen[0].headers["User-Agent"].startswith("context7-agent/")

    def test_context_manager_closes_client(self, make_client, json_response):
        """with 블록 종료 시 HTTP 클라이언트 닫힘."""
        with make_client(json_response({"results": []})) as client:
            client.search_library("react")

        assert client.http_client._client.is_closed


class TestSearchLibrary:
    """search_library 테스트."""

    def test_search(self, make_client, json_response):
        """검색 결과가 SearchLibraryResponse로 변환되는지 확인."""
        client = make_client(json_response({"results": [REACT_RESULT]}))
        result = client.search_library("react")

        assert isinstance(result, SearchLibraryResponse)
        assert len(result.results) == 1
        assert result.results[0].id == "/facebook/react"

    def test_result_structure(self, make_client, json_response):
        """camelCase 필드가 snake_case 속성으로 변환되는지 확인."""
        client = make_client(json_response({"results": [REACT_RESULT]}))
        first = client.search_library("react").results[0]

        assert first.title == "React"
        assert first.description.startswith("A JavaScript library")
        assert first.branch == "main"
        assert first.last_update_date == "2023-01-01"
        assert first.state == "indexed"
        assert first.total_tokens == 1000
        assert first.total_snippets == 10
        assert first.versions == []

    def test_request_shape(self, make_client, requests_seen, json_response):
        """v2/search 엔드포인트와 query 파라미터."""
        client = make_client(json_response({"results": []}))
        client.search_library("next.js")

        request = requests_seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/v2/search"
        assert request.url.params["query"] == "next.js"

    def test_minimal_results(self, make_client, json_response):
        """id만 있는 결과도 허용."""
        client = make_client(json_response({"results": [{"id": "dummy"}]}))

        for query in ["vue", "express", "next"]:
            result = client.search_library(query)
            assert result.results[0].id == "dummy"
            assert result.results[0].title == ""

    def test_empty_query(self, make_client, json_response):
        """빈 검색어는 빈 결과."""
        client = make_client(json_response({"results": []}))
        result = client.search_library("")

        assert result.results == []

    def test_metadata(self, make_client, json_response):
        """metadata.authentication 전달."""
        client = make_client(
            json_response({"results": [], "metadata": {"authentication": "personal"}})
        )
        assert client.search_library("react").metadata.authentication == "personal"


class TestGetDocsText:
    """get_docs(format="txt") 테스트."""

    def test_text_body_with_pagination_headers(self, make_client):
        """평문 본문 + x-context7-* 헤더."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                text="# Hooks\n\nuseState lets you add state.",
                headers={
                    "x-context7-page": "2",
                    "x-context7-limit": "5",
                    "x-context7-total-pages": "4",
                    "x-context7-has-next": "true",
                    "x-context7-has-prev": "true",
                    "x-context7-total-tokens": "1234",
                },
            )

        client = make_client(handler)
        result = client.get_docs("/facebook/react", format="txt", page=2, limit=5)

        assert isinstance(result, TextDocsResponse)
        assert result.content.startswith("# Hooks")
        assert result.total_tokens == 1234
        assert result.pagination.page == 2
        assert result.pagination.limit == 5
        assert result.pagination.total_pages == 4
        assert result.pagination.has_next is True
        assert result.pagination.has_prev is True

    @pytest.mark.parametrize("mode", ["code", "info"])
    def test_json_body_with_content(self, make_client, json_response, mode):
        """JSON 본문에 content가 있으면 그대로 사용."""
        client = make_client(
            json_response(
                {
                    "content": "dummy content",
                    "pagination": {"page": 1, "totalPages": 1},
                    "totalTokens": 100,
                }
            )
        )
        result = client.get_docs("/facebook/react", mode=mode, format="txt", limit=5)

        assert isinstance(result, TextDocsResponse)
        assert result.content == "dummy content"
        assert result.total_tokens == 100
        assert result.pagination.page == 1
        assert result.pagination.limit == 5

    def test_pagination_passthrough(self, make_client):
        """페이지별 메타데이터가 그대로 전달되는지 확인."""

        def handler(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params["page"])
            return httpx.Response(
                200,
                json={
                    "content": f"page {page}",
                    "pagination": {"page": page},
                    "totalTokens": 10,
                },
            )

        client = make_client(handler)
        page1 = client.get_docs("/facebook/react", format="txt", page=1, limit=3)
        page2 = client.get_docs("/facebook/react", format="txt", page=2, limit=3)

        assert page1.content == "page 1"
        assert page1.pagination.page == 1
        assert page2.pagination.page == 2

    def test_request_shape(self, make_client, requests_seen, json_response):
        """문서 조회 경로와 쿼리 파라미터 (None 값 제외)."""
        client = make_client(
            json_response({"content": "hooks", "pagination": {}, "totalTokens": 1})
        )
        client.get_docs("/facebook/react", format="txt", topic="hooks", limit=5)

        request = requests_seen[0]
        assert request.url.path == "/api/v2/docs/code/facebook/react"
        assert request.url.params["type"] == "txt"
        assert request.url.params["topic"] == "hooks"
        assert request.url.params["limit"] == "5"
        assert "page" not in request.url.params

    def test_version_in_library_id(self, make_client, requests_seen, json_response):
        """식별자에 포함된 버전이 경로에 반영."""
        client = make_client(
            json_response({"content": "v14", "pagination": {}, "totalTokens": 1})
        )
        client.get_docs("/vercel/next.js/v14.3.0-canary.87", format="txt")

        assert (
            requests_seen[0].url.path
            == "/api/v2/docs/code/vercel/next.js/v14.3.0-canary.87"
        )

    def test_version_option_overrides(self, make_client, requests_seen, json_response):
        """version 인자가 식별자의 버전보다 우선."""
        client = make_client(
            json_response({"content": "v18", "pagination": {}, "totalTokens": 1})
        )
        client.get_docs("/facebook/react/v17", mode="info", format="txt", version="v18")

        assert requests_seen[0].url.path == "/api/v2/docs/info/facebook/react/v18"


class TestGetDocsJson:
    """get_docs(format="json") 응답 타입 판별 테스트."""

    def test_default_format_is_json(self, make_client, requests_seen, json_response):
        """format 기본값은 json."""
        client = make_client(
            json_response({"snippets": [], "totalTokens": 0, "pagination": {}})
        )
        result = client.get_docs("/facebook/react", limit=5)

        assert isinstance(result, CodeDocsResponse)
        assert requests_seen[0].url.params["type"] == "json"

    def test_code_docs(self, make_client, json_response):
        """mode=code 스니펫 필드 변환."""
        client = make_client(
            json_response(
                {
                    "snippets": [CODE_SNIPPET],
                    "totalTokens": 100,
                    "pagination": {"page": 1, "totalPages": 1},
                }
            )
        )
        result = client.get_docs("/facebook/react", mode="code", format="json", limit=3)

        assert isinstance(result, CodeDocsResponse)
        assert result.total_tokens == 100
        snippet = result.snippets[0]
        assert snippet.code_title == "test"
        assert snippet.code_language == "ts"
        assert snippet.code_tokens == 10
        assert snippet.code_id == "1"
        assert snippet.page_title == "Page"
        assert snippet.code_list[0].code == "code"
        assert snippet.code_list[0].language == "ts"

    def test_code_list_objects(self, make_client, json_response):
        """객체 형태의 codeList 항목."""
        snippet = {**CODE_SNIPPET, "codeList": [{"language": "tsx", "code": "<App />"}]}
        client = make_client(
            json_response({"snippets": [snippet], "totalTokens": 5, "pagination": {}})
        )
        result = client.get_docs("/facebook/react", format="json")

        assert result.snippets[0].code_list[0].language == "tsx"
        assert result.snippets[0].code_list[0].code == "<App />"

    def test_info_docs(self, make_client, json_response):
        """mode=info 스니펫 필드 변환."""
        client = make_client(
            json_response(
                {
                    "snippets": [{"content": "info", "contentTokens": 10}],
                    "totalTokens": 100,
                    "pagination": {"page": 1, "totalPages": 1},
                }
            )
        )
        result = client.get_docs("/facebook/react", mode="info", format="json", limit=3)

        assert isinstance(result, InfoDocsResponse)
        assert result.snippets[0].content == "info"
        assert result.snippets[0].content_tokens == 10
        assert result.snippets[0].page_id is None

    def test_pagination_structure(self, make_client, json_response):
        """JSON 본문의 페이지네이션 필드."""
        client = make_client(
            json_response(
                {
                    "snippets": [],
                    "totalTokens": 0,
                    "pagination": {
                        "page": 1,
                        "limit": 5,
                        "totalPages": 10,
                        "hasNext": True,
                        "hasPrev": False,
                    },
                }
            )
        )
        result = client.get_docs("/facebook/react", format="json", page=1, limit=5)

        assert result.pagination.page == 1
        assert result.pagination.limit == 5
        assert result.pagination.total_pages == 10
        assert result.pagination.has_next is True
        assert result.pagination.has_prev is False

    def test_empty_snippet_objects(self, make_client, json_response):
        """필드가 없는 스니펫은 기본값으로 채움."""
        client = make_client(
            json_response({"snippets": [{}, {}], "totalTokens": 0, "pagination": {}})
        )
        result = client.get_docs("/facebook/react", format="json", limit=2)

        assert len(result.snippets) == 2
        assert result.snippets[0].code_list == []
        assert result.pagination.limit == 2


class TestErrorHandling:
    """오류 처리 테스트."""

    def test_not_found(self, make_client, json_response):
        """404 응답은 상태 코드와 함께 Context7Error."""
        client = make_client(json_response({"error": "Not Found"}, status_code=404))

        with pytest.raises(Context7Error) as exc_info:
            client.get_docs("/nonexistent/library", format="txt", limit=1)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Not Found"

    def test_error_message_field(self, make_client, json_response):
        """본문의 message 필드를 오류 메시지로 사용."""
        client = make_client(
            json_response({"message": "Rate limit exceeded"}, status_code=429)
        )

        with pytest.raises(Context7Error, match="Rate limit exceeded"):
            client.search_library("react")

    def test_reason_phrase_fallback(self, make_client):
        """본문에 메시지가 없으면 reason phrase 사용."""
        client = make_client(lambda request: httpx.Response(500, text="oops"))

        with pytest.raises(Context7Error) as exc_info:
            client.search_library("react")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal Server Error"

    def test_invalid_library_id(self, make_client, requests_seen, json_response):
        """요청 전에 식별자 형식 검증."""
        client = make_client(json_response({}))

        with pytest.raises(Context7Error, match="Invalid library ID"):
            client.get_docs("react")

        assert requests_seen == []

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"mode": "summary"},
            {"format": "xml"},
            {"page": 0},
            {"limit": -1},
        ],
    )
    def test_invalid_options(self, make_client, requests_seen, json_response, kwargs):
        """잘못된 옵션은 요청 전에 거부."""
        client = make_client(json_response({}))

        with pytest.raises(Context7Error, match="Invalid"):
            client.get_docs("/facebook/react", **kwargs)

        assert requests_seen == []
