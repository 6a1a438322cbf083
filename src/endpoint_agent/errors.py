"""스캔 중 발생하는 예외 계층."""
from __future__ import annotations
from pathlib import Path


class EndpointAgentError(Exception):
    """endpoint-agent 예외의 공통 부모."""


class RootDirectoryError(EndpointAgentError):
    """스캔 루트가 없거나 디렉터리가 아니거나 읽을 수 없음 (치명적)."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not map directory '{self.path}': {reason}")


class UnknownAnnotationError(EndpointAgentError):
    """*Mapping 형태지만 사전에 없는 어노테이션 (strict 모드에서 치명적)."""

    def __init__(self, name: str, path: Path | str | None = None, line_number: int | None = None):
        self.name = name
        self.path = Path(path) if path is not None else None
        self.line_number = line_number
        super().__init__(self._message())

    def _message(self) -> str:
        msg = f"Unknown http verb annotation found: {self.name}"
        if self.path is not None:
            where = f"{self.path}:{self.line_number}" if self.line_number else str(self.path)
            msg += f" ({where})"
        return msg

    def at(self, path: Path | str, line_number: int) -> "UnknownAnnotationError":
        """파일 위치 정보를 붙인 새 예외를 만든다."""
        return UnknownAnnotationError(self.name, path, line_number)


class FileSkippedError(EndpointAgentError):
    """파일 하나를 건너뜀 (복구 가능, 경고로 보고)."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Ignoring file {self.path}: {reason}")
