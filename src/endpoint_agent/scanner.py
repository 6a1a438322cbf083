"""Controller 파일 하나를 읽어 엔드포인트 목록을 만든다."""
from __future__ import annotations
from pathlib import Path
import logging

from endpoint_agent.config import ScanConfig
from endpoint_agent.errors import FileSkippedError, UnknownAnnotationError
from endpoint_agent.models import EndpointMatch, FileReport, UnrecognizedAnnotation
from endpoint_agent.parser import parse_line

log = logging.getLogger(__name__)


def is_controller_file(name: str, cfg: ScanConfig | None = None) -> bool:
    cfg = cfg or ScanConfig()
    return name.endswith(cfg.controller_suffix)


def _read_bytes(path: Path, limit: int) -> bytes:
    try:
        size = path.stat().st_size
    except OSError as e:
        raise FileSkippedError(path, f"could not read metadata ({e})") from e
    if size > limit:
        raise FileSkippedError(path, f"exceeds the buffer limit of {limit} bytes")

    try:
        fh = path.open("rb")
    except OSError as e:
        raise FileSkippedError(path, f"could not open file ({e})") from e
    with fh:
        try:
            # 크기 확인 이후 파일이 커진 경우도 잡기 위해 limit + 1 까지만 읽음
            data = fh.read(limit + 1)
        except OSError as e:
            raise FileSkippedError(path, f"could not read file ({e})") from e
    if len(data) > limit:
        raise FileSkippedError(path, f"exceeds the buffer limit of {limit} bytes")
    return data


def scan_controller_file(path: Path, root: Path | None = None, cfg: ScanConfig | None = None) -> FileReport:
    """
    파일을 줄 단위로 파싱해 FileReport를 반환한다.
    - 크기 초과 / 열기·읽기 실패: FileSkippedError
    - 미등록 어노테이션: strict면 UnknownAnnotationError, 아니면 unrecognized에 기록
    """
    cfg = cfg or ScanConfig()
    data = _read_bytes(path, cfg.max_file_bytes)
    text = data.decode("utf-8", errors="replace")

    endpoints: list[EndpointMatch] = []
    unrecognized: list[UnrecognizedAnnotation] = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        try:
            match = parse_line(line, line_number)
        except UnknownAnnotationError as e:
            if cfg.strict:
                raise e.at(path, line_number) from None
            log.warning("%s:%d: unknown http verb annotation %s", path, line_number, e.name)
            unrecognized.append(UnrecognizedAnnotation(name=e.name, line_number=line_number))
            continue
        if match is not None:
            endpoints.append(match)

    rel = path.relative_to(root) if root is not None else Path(path.name)
    log.debug("%s: %d endpoint(s)", rel.as_posix(), len(endpoints))
    return FileReport(
        file_name=path.name,
        path=rel.as_posix(),
        endpoints=endpoints,
        unrecognized=unrecognized,
    )
