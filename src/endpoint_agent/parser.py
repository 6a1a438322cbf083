"""
Spring *Mapping 어노테이션 한 줄 파서.

한 줄을 문자 단위로 읽는 4-상태 오토마타:
  ANNOTATION_NAME → ANNOTATION_ATTRIBUTES → ENDPOINT_PATH → EOC
상태는 앞으로만 진행한다.
"""
from __future__ import annotations
from enum import Enum, auto
import re

from endpoint_agent.errors import UnknownAnnotationError
from endpoint_agent.models import EndpointMatch, Verb

# 빠른 1차 필터: @<word>Mapping
ENDPOINT_LINE_RE = re.compile(r"@\w+Mapping")

ANNOTATION_VERBS: dict[str, Verb] = {
    "@RequestMapping": Verb.ANY,
    "@DeleteMapping": Verb.DELETE,
    "@GetMapping": Verb.GET,
    "@HeadMapping": Verb.HEAD,
    "@OptionsMapping": Verb.OPTIONS,
    "@PatchMapping": Verb.PATCH,
    "@PostMapping": Verb.POST,
    "@PutMapping": Verb.PUT,
}


class State(Enum):
    ANNOTATION_NAME = auto()
    ANNOTATION_ATTRIBUTES = auto()
    ENDPOINT_PATH = auto()
    EOC = auto()


def is_candidate(line: str) -> bool:
    return line.strip().startswith("@") and ENDPOINT_LINE_RE.search(line) is not None


class AnnotationLineParser:
    """한 줄에서 (verb, path)를 추출한다. 인스턴스는 한 줄에만 사용."""

    def __init__(self, line: str, line_number: int = 0):
        self.line = line
        self.line_number = line_number
        self.state = State.ANNOTATION_NAME
        self.buffer: list[str] = []
        self.verb: Verb | None = None
        self.path: str | None = None
        self.prev_c = "\0"

    def run(self) -> EndpointMatch | None:
        handlers = {
            State.ANNOTATION_NAME: self._on_annotation_name,
            State.ANNOTATION_ATTRIBUTES: self._on_annotation_attributes,
            State.ENDPOINT_PATH: self._on_endpoint_path,
        }
        for cur_c in self.line:
            if self.state is State.EOC:
                break
            # 직전 문자 하나만 본다 (연속된 '\' 개수는 세지 않음)
            is_escape = self.prev_c == "\\"
            handlers[self.state](cur_c, is_escape)
            self.prev_c = cur_c

        if self.state is State.ANNOTATION_NAME:
            # 괄호 없이 줄이 끝남: 경로 없는 어노테이션
            self._resolve_verb()
            self.path = ""
            self.state = State.EOC

        if self.state is not State.EOC:
            # 따옴표 문자열을 찾지 못했거나 닫히지 않음
            return None
        return EndpointMatch(verb=self.verb, path=self.path, line_number=self.line_number)

    def _resolve_verb(self) -> None:
        name = "".join(self.buffer)
        try:
            self.verb = ANNOTATION_VERBS[name]
        except KeyError:
            raise UnknownAnnotationError(name) from None
        self.buffer.clear()

    def _on_annotation_name(self, cur_c: str, is_escape: bool) -> None:
        if cur_c == "(":
            self._resolve_verb()
            self.state = State.ANNOTATION_ATTRIBUTES
        elif not cur_c.isspace():
            self.buffer.append(cur_c)

    def _on_annotation_attributes(self, cur_c: str, is_escape: bool) -> None:
        # value= / path= 등 속성 이름은 무시하고 첫 문자열을 경로로 본다
        if cur_c == '"':
            self.buffer.clear()
            self.state = State.ENDPOINT_PATH

    def _on_endpoint_path(self, cur_c: str, is_escape: bool) -> None:
        if cur_c == '"' and not is_escape:
            self.path = "".join(self.buffer)
            self.buffer.clear()
            self.state = State.EOC
        elif cur_c == "\\" and not is_escape:
            return
        else:
            self.buffer.append(cur_c)


def parse_line(line: str, line_number: int = 0) -> EndpointMatch | None:
    """
    엔드포인트 어노테이션 줄이면 EndpointMatch, 아니면 None.
    사전에 없는 *Mapping 이름이면 UnknownAnnotationError.
    """
    if not is_candidate(line):
        return None
    return AnnotationLineParser(line, line_number).run()
