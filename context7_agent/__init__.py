"""Context7 문서 검색 SDK와 LLM 에이전트 도구.

사용법:
    from context7_agent import Context7, Context7Agent, resolve_library, get_library_docs

    # SDK 직접 사용
    client = Context7()
    client.search_library("react")

    # LangChain 도구로 사용
    tools = [resolve_library(), get_library_docs(default_max_results=5)]

    # 에이전트 실행
    result = Context7Agent(max_steps=5).generate("How do React hooks work?")
"""

__version__ = "0.1.0"

from context7_agent.agent import (
    AgentResult,
    AgentStep,
    Context7Agent,
    ToolCall,
    ToolResult,
)
from context7_agent.prompts import (
    AGENT_PROMPT,
    GET_LIBRARY_DOCS_DESCRIPTION,
    RESOLVE_LIBRARY_DESCRIPTION,
    SYSTEM_PROMPT,
)
from context7_agent.sdk import (
    CodeDocsResponse,
    Context7,
    Context7Error,
    InfoDocsResponse,
    SearchLibraryResponse,
    TextDocsResponse,
)
from context7_agent.tools import context7_tools, get_library_docs, resolve_library

__all__ = [
    "Context7",
    "Context7Error",
    "SearchLibraryResponse",
    "CodeDocsResponse",
    "InfoDocsResponse",
    "TextDocsResponse",
    "resolve_library",
    "get_library_docs",
    "context7_tools",
    "Context7Agent",
    "AgentResult",
    "AgentStep",
    "ToolCall",
    "ToolResult",
    "SYSTEM_PROMPT",
    "AGENT_PROMPT",
    "RESOLVE_LIBRARY_DESCRIPTION",
    "GET_LIBRARY_DOCS_DESCRIPTION",
]
