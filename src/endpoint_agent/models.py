"""스캔 결과 Pydantic 모델."""
from __future__ import annotations
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Verb(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    ANY = "ANY"   # @RequestMapping: 모든 메서드


class EndpointMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    verb: Verb
    path: str                   # /users/{id}
    line_number: int = 0        # 1부터 시작


class UnrecognizedAnnotation(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str                   # @FooMapping
    line_number: int = 0


class FileReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: str              # OrderController.java
    path: str                   # 루트 기준 상대 경로 (posix)
    endpoints: list[EndpointMatch] = Field(default_factory=list)
    unrecognized: list[UnrecognizedAnnotation] = Field(default_factory=list)


class ScanWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    reason: str


class ScanReport(BaseModel):
    root: str
    files: list[FileReport] = Field(default_factory=list)
    warnings: list[ScanWarning] = Field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def endpoint_count(self) -> int:
        return sum(len(f.endpoints) for f in self.files)
