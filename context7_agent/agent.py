"""Context7 문서 에이전트 모듈.

Context7 도구(`resolve_library`, `get_library_docs`)를 갖춘 DeepAgent를
생성하고, 모델 주도 도구 호출 루프를 실행합니다. 추론 루프 자체는
deepagents/LangGraph에 위임하며, 이 모듈은 도구 구성과 종료 조건만
담당합니다.

## 에이전트 실행 흐름

```
┌─────────────────────────────────────────────────────────────────┐
│                  Context7Agent.generate(prompt)                  │
├─────────────────────────────────────────────────────────────────┤
│                                                                  │
│   1. graph.stream({"messages": [user]}, stream_mode="values")   │
│                                                                  │
│   2. 상태마다 단계(step) 집계                                    │
│      step = 모델 응답 1회 + 요청된 도구 실행 결과                │
│                                                                  │
│   3. 종료 조건                                                   │
│      - 모델이 도구 호출 없이 응답 (그래프 자연 종료)             │
│      - 완료된 단계 수 >= max_steps                               │
│                                                                  │
│   4. AgentResult(text, steps, messages) 반환                    │
│                                                                  │
└─────────────────────────────────────────────────────────────────┘
```
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from contextlib import aclosing
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from deepagents import create_deep_agent
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, ToolMessage
from langchain_core.tools import BaseTool
from langchain_openai import ChatOpenAI
from langgraph.graph.state import CompiledStateGraph

from context7_agent.prompts import AGENT_PROMPT
from context7_agent.sdk import Context7
from context7_agent.tools import DEFAULT_MAX_RESULTS, context7_tools

if TYPE_CHECKING:
    from deepagents.backends.protocol import BackendFactory, BackendProtocol

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 5
DEFAULT_MODEL = "gpt-4.1"


# ============================================================================
# 실행 결과 타입
# ============================================================================


@dataclass
class ToolCall:
    """모델이 요청한 도구 호출."""

    tool_name: str
    tool_call_id: str
    args: dict[str, Any]


@dataclass
class ToolResult:
    """도구 실행 결과."""

    tool_name: str
    tool_call_id: str
    output: str


@dataclass
class AgentStep:
    """모델 응답 1회와 그 응답이 요청한 도구 실행 결과."""

    text: str = ""
    tool_calls: list[ToolCall] = field(default_factory=list)
    tool_results: list[ToolResult] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """요청된 모든 도구 호출에 결과가 도착했는지 여부."""
        return len(self.tool_results) >= len(self.tool_calls)


@dataclass
class AgentResult:
    """에이전트 실행 결과.

    Attributes:
        text: 마지막 모델 응답의 텍스트.
        steps: 실행된 단계 목록.
        messages: 그래프의 최종 메시지 목록.
    """

    text: str
    steps: list[AgentStep]
    messages: list[BaseMessage]

    @property
    def tool_calls(self) -> list[ToolCall]:
        return [call for step in self.steps for call in step.tool_calls]


# ============================================================================
# 메시지 → 단계 변환
# ============================================================================


def _message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def collect_steps(messages: Iterable[BaseMessage]) -> list[AgentStep]:
    """메시지 목록을 단계 목록으로 묶는다.

    AIMessage마다 새 단계를 시작하고, 뒤따르는 ToolMessage는 직전 단계의
    도구 결과로 붙입니다. 사용자/시스템 메시지는 무시합니다.
    """
    steps: list[AgentStep] = []
    names_by_id: dict[str, str] = {}

    for message in messages:
        if isinstance(message, AIMessage):
            calls = [
                ToolCall(
                    tool_name=call["name"],
                    tool_call_id=call.get("id") or "",
                    args=dict(call.get("args") or {}),
                )
                for call in message.tool_calls
            ]
            for call in calls:
                names_by_id[call.tool_call_id] = call.tool_name
            steps.append(AgentStep(text=_message_text(message), tool_calls=calls))
        elif isinstance(message, ToolMessage) and steps:
            steps[-1].tool_results.append(
                ToolResult(
                    tool_name=message.name
                    or names_by_id.get(message.tool_call_id, ""),
                    tool_call_id=message.tool_call_id,
                    output=_message_text(message),
                )
            )

    return steps


# ============================================================================
# 에이전트
# ============================================================================


class Context7Agent:
    """Context7 도구로 라이브러리 문서를 조사하는 에이전트.

    Args:
        model: 사용할 LLM 모델.
            - None: 기본 gpt-4.1 (temperature=0) 사용
            - str: 모델 이름 (예: "openai:gpt-4o")
            - BaseChatModel: 직접 생성한 모델 인스턴스
        system: 시스템 프롬프트. 기본값: AGENT_PROMPT.
        tools: Context7 도구와 함께 등록할 추가 도구.
        api_key: Context7 API 키 (생략 시 환경 변수).
        default_max_results: 문서 조회 시 페이지당 결과 수.
        max_steps: 최대 단계 수. 이 수만큼 단계가 끝나면 루프를 멈춥니다.
        backend: deepagents 파일 작업용 백엔드.
        client: 도구가 공유할 Context7 클라이언트.

    Raises:
        ValueError: max_steps가 1보다 작은 경우.

    Example:
        >>> agent = Context7Agent(max_steps=3)
        >>> result = agent.generate("How do I use React hooks?")
        >>> [call.tool_name for call in result.tool_calls]
        ['resolve_library', 'get_library_docs']
    """

    def __init__(
        self,
        model: str | BaseChatModel | None = None,
        *,
        system: str = AGENT_PROMPT,
        tools: Sequence[BaseTool] | None = None,
        api_key: str | None = None,
        default_max_results: int = DEFAULT_MAX_RESULTS,
        max_steps: int = DEFAULT_MAX_STEPS,
        backend: BackendProtocol | BackendFactory | None = None,
        client: Context7 | None = None,
    ):
        if max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {max_steps}")

        # 모델이 지정되지 않았으면 기본 모델 사용
        if model is None:
            model = ChatOpenAI(model=DEFAULT_MODEL, temperature=0.0)

        self.system = system
        self.max_steps = max_steps
        self.tools: list[BaseTool] = [
            *context7_tools(
                api_key, default_max_results=default_max_results, client=client
            ),
            *(tools or []),
        ]
        self.graph: CompiledStateGraph = create_deep_agent(
            model=model,
            tools=self.tools,
            system_prompt=system,
            backend=backend,
        )

    def _should_stop(self, messages: list[BaseMessage]) -> bool:
        steps = collect_steps(messages)
        return len(steps) >= self.max_steps and steps[-1].is_complete

    def _build_result(self, state: dict[str, Any] | None) -> AgentResult:
        messages = list((state or {}).get("messages", []))
        steps = collect_steps(messages)
        text = steps[-1].text if steps else ""
        logger.debug("agent finished after %d step(s)", len(steps))
        return AgentResult(text=text, steps=steps, messages=messages)

    @staticmethod
    def _inputs(prompt: str) -> dict[str, Any]:
        return {"messages": [{"role": "user", "content": prompt}]}

    def generate(self, prompt: str) -> AgentResult:
        """프롬프트로 에이전트 루프를 실행하고 결과를 반환한다."""
        state = None
        for state in self.graph.stream(self._inputs(prompt), stream_mode="values"):
            if self._should_stop(state.get("messages", [])):
                logger.info("stopping after %d step(s)", self.max_steps)
                break
        return self._build_result(state)

    async def agenerate(self, prompt: str) -> AgentResult:
        """generate()의 비동기 버전."""
        state = None
        async with aclosing(
            self.graph.astream(self._inputs(prompt), stream_mode="values")
        ) as stream:
            async for state in stream:
                if self._should_stop(state.get("messages", [])):
                    logger.info("stopping after %d step(s)", self.max_steps)
                    break
        return self._build_result(state)
