"""디렉터리 트리를 재귀 탐색해 Controller 파일을 찾고 ScanReport를 만든다."""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Union
import logging
import os

from endpoint_agent.config import ScanConfig
from endpoint_agent.errors import FileSkippedError, RootDirectoryError
from endpoint_agent.models import FileReport, ScanReport, ScanWarning
from endpoint_agent.scanner import is_controller_file, scan_controller_file

log = logging.getLogger(__name__)

# 탐색 결과 항목: 스캔할 파일 또는 탐색 중 발생한 경고
WalkItem = Union[Path, ScanWarning]


def _display(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix() or "."
    except ValueError:
        return str(path)


def _warn(path: Path, root: Path, reason: str) -> ScanWarning:
    w = ScanWarning(path=_display(path, root), reason=reason)
    # 사용자 출력은 run.py가 한 줄씩 담당
    log.debug("%s: %s", w.path, w.reason)
    return w


def _list_dir(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda e: e.name)


def _walk_dir(
    root: Path,
    cfg: ScanConfig,
    entries: list[os.DirEntry],
    visited: set[Path],
) -> list[WalkItem]:
    items: list[WalkItem] = []

    for entry in entries:
        entry_path = Path(entry.path)
        is_link = entry.is_symlink()

        if entry.is_dir(follow_symlinks=True):
            # '.'으로 시작하는 디렉터리(.git, .idea ...)는 조용히 제외
            if entry.name.startswith(cfg.hidden_prefix):
                continue
            if is_link and not cfg.follow_symlinks:
                items.append(_warn(entry_path, root, "symbolic link to directory not followed"))
                continue
            if cfg.follow_symlinks:
                # 링크를 따라가면 같은 실제 디렉터리를 두 번 볼 수 있음 (순환 포함)
                real = entry_path.resolve()
                if real in visited:
                    items.append(_warn(entry_path, root, f"directory already visited ({real})"))
                    continue
                visited.add(real)
            try:
                children = _list_dir(entry_path)
            except OSError as e:
                items.append(_warn(entry_path, root, f"could not read directory ({e})"))
                continue
            items.extend(_walk_dir(root, cfg, children, visited))
            continue

        if entry.is_file() and is_controller_file(entry.name, cfg):
            if is_link and not cfg.follow_symlinks:
                items.append(_warn(entry_path, root, "symbolic link to file not followed"))
                continue
            if cfg.follow_symlinks:
                real = entry_path.resolve()
                if real in visited:
                    items.append(_warn(entry_path, root, f"file already visited ({real})"))
                    continue
                visited.add(real)
            items.append(entry_path)

    return items


def collect_controller_files(root: Path | str, cfg: ScanConfig | None = None) -> list[WalkItem]:
    """
    스캔 대상 파일과 탐색 경고를 탐색 순서(이름 정렬)대로 반환한다.
    루트가 없거나 디렉터리가 아니거나 읽을 수 없으면 RootDirectoryError.
    """
    cfg = cfg or ScanConfig()
    root_path = Path(root)
    if not root_path.exists():
        raise RootDirectoryError(root_path, "no such directory")
    if not root_path.is_dir():
        raise RootDirectoryError(root_path, "not a directory")
    try:
        entries = _list_dir(root_path)
    except OSError as e:
        raise RootDirectoryError(root_path, str(e)) from e

    visited = {root_path.resolve()} if cfg.follow_symlinks else set()
    return _walk_dir(root_path, cfg, entries, visited)


def _scan_one(path: Path, root: Path, cfg: ScanConfig) -> FileReport | ScanWarning:
    try:
        return scan_controller_file(path, root, cfg)
    except FileSkippedError as e:
        return _warn(path, root, e.reason)


def _scan_all(files: list[Path], root: Path, cfg: ScanConfig) -> list[FileReport | ScanWarning]:
    scan = partial(_scan_one, root=root, cfg=cfg)
    if cfg.jobs > 1 and len(files) > 1:
        # map()은 제출 순서대로 결과를 돌려주므로 순서가 순차 실행과 같다
        with ThreadPoolExecutor(max_workers=cfg.jobs) as executor:
            return list(executor.map(scan, files))
    return [scan(f) for f in files]


def walk_controllers(root: Path | str, cfg: ScanConfig | None = None) -> ScanReport:
    """루트 아래 모든 *Controller.java 파일을 스캔해 ScanReport를 반환한다."""
    cfg = cfg or ScanConfig()
    root_path = Path(root)
    items = collect_controller_files(root_path, cfg)

    files = [i for i in items if isinstance(i, Path)]
    outcomes = iter(_scan_all(files, root_path, cfg))

    reports: list[FileReport] = []
    warnings: list[ScanWarning] = []
    for item in items:
        result = next(outcomes) if isinstance(item, Path) else item
        if isinstance(result, FileReport):
            reports.append(result)
        else:
            warnings.append(result)

    return ScanReport(root=str(root_path), files=reports, warnings=warnings)
