"""Context7 CLI - 라이브러리 검색, 문서 조회, 에이전트 질의.

Usage:
    context7-agent search react
    context7-agent docs /facebook/react --topic hooks --format txt
    context7-agent ask "How do I use React Server Components?" --max-steps 5
"""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from context7_agent.agent import Context7Agent
from context7_agent.sdk import (
    CodeDocsResponse,
    Context7,
    Context7Error,
    InfoDocsResponse,
    TextDocsResponse,
)

console = Console()

COLORS = {
    "primary": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "dim": "dim",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


# ============================================================================
# 서브커맨드
# ============================================================================


def cmd_search(args: argparse.Namespace) -> int:
    with Context7(api_key=args.api_key) as client:
        response = client.search_library(args.query)

    if not response.results:
        console.print(
            f"[{COLORS['warning']}]No libraries found for '{args.query}'[/{COLORS['warning']}]"
        )
        return 0

    table = Table(title=f"Context7 libraries matching '{args.query}'")
    table.add_column("Library ID", style=COLORS["primary"])
    table.add_column("Title")
    table.add_column("Snippets", justify="right")
    table.add_column("Trust", justify="right")
    table.add_column("Description", style=COLORS["dim"])

    for result in response.results:
        table.add_row(
            result.id,
            result.title,
            str(result.total_snippets),
            "" if result.trust_score is None else str(result.trust_score),
            result.description,
        )

    console.print(table)
    return 0


def cmd_docs(args: argparse.Namespace) -> int:
    with Context7(api_key=args.api_key) as client:
        docs = client.get_docs(
            args.library_id,
            mode=args.mode,
            format=args.format,
            topic=args.topic,
            version=args.version,
            page=args.page,
            limit=args.limit,
        )

    if isinstance(docs, TextDocsResponse):
        console.print(Markdown(docs.content))
    elif isinstance(docs, CodeDocsResponse):
        for snippet in docs.snippets:
            console.print(f"[bold]{snippet.code_title}[/bold] [dim]({snippet.page_title})[/dim]")
            if snippet.code_description:
                console.print(snippet.code_description)
            for example in snippet.code_list:
                console.print(
                    Markdown(f"```{example.language}\n{example.code}\n```")
                )
    elif isinstance(docs, InfoDocsResponse):
        for snippet in docs.snippets:
            if snippet.breadcrumb:
                console.print(f"[dim]{snippet.breadcrumb}[/dim]")
            console.print(Markdown(snippet.content))

    pagination = docs.pagination
    console.print(
        f"\n[dim]Page {pagination.page}/{pagination.total_pages} · "
        f"{docs.total_tokens} tokens"
        f"{' · more pages available' if pagination.has_next else ''}[/dim]"
    )
    return 0


def cmd_ask(args: argparse.Namespace) -> int:
    agent = Context7Agent(
        model=args.model,
        api_key=args.api_key,
        max_steps=args.max_steps,
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Researching documentation...", total=None)
        result = agent.generate(args.prompt)

    for index, call in enumerate(result.tool_calls, start=1):
        console.print(f"[dim][{index}] {call.tool_name} {call.args}[/dim]")

    console.print(
        Panel(
            Markdown(result.text or "_No answer produced._"),
            title=f"Answer ({len(result.steps)} step(s))",
            border_style=COLORS["success"],
        )
    )
    return 0


# ============================================================================
# 엔트리포인트
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="context7-agent",
        description="Context7 문서 검색 및 문서 에이전트",
    )
    parser.add_argument("--api-key", help="Context7 API 키 (기본: CONTEXT7_API_KEY)")
    parser.add_argument("-v", "--verbose", action="store_true", help="디버그 로그 출력")

    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="라이브러리 검색")
    search.add_argument("query", help="라이브러리 이름 (예: react)")
    search.set_defaults(handler=cmd_search)

    docs = subparsers.add_parser("docs", help="라이브러리 문서 조회")
    docs.add_argument("library_id", help="라이브러리 ID (예: /facebook/react)")
    docs.add_argument("--mode", choices=["code", "info"], default="code")
    docs.add_argument("--format", choices=["json", "txt"], default="txt")
    docs.add_argument("--topic", help="주제 필터 (예: hooks)")
    docs.add_argument("--version", help="라이브러리 버전")
    docs.add_argument("--page", type=int, help="페이지 번호 (1부터)")
    docs.add_argument("--limit", type=int, help="페이지당 결과 수")
    docs.set_defaults(handler=cmd_docs)

    ask = subparsers.add_parser("ask", help="문서 에이전트에게 질문")
    ask.add_argument("prompt", help="질문 내용")
    ask.add_argument("--model", help="사용할 LLM 모델 (예: openai:gpt-4.1)")
    ask.add_argument("--max-steps", type=int, default=5, help="최대 단계 수 (기본: 5)")
    ask.set_defaults(handler=cmd_ask)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI 엔트리포인트."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        return args.handler(args)
    except Context7Error as e:
        status = f" (HTTP {e.status_code})" if e.status_code else ""
        console.print(f"[bold {COLORS['error']}]Error{status}:[/bold {COLORS['error']}] {e.message}")
        return 1
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted by user[/dim]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
