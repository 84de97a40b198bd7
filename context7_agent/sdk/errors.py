"""Context7 SDK 예외 정의."""

from __future__ import annotations


class Context7Error(Exception):
    """Context7 SDK에서 발생하는 모든 오류의 단일 예외 타입.

    API 키 누락, 잘못된 인자, HTTP 실패, 전송 실패, 응답 형식 오류 등
    SDK 내부에서 발생하는 실패는 모두 이 예외로 표현됩니다.

    Attributes:
        message: 사람이 읽을 수 있는 오류 메시지.
        status_code: HTTP 응답 상태 코드 (HTTP 오류가 아니면 None).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"Context7Error(message={self.message!r}, status_code={self.status_code!r})"
