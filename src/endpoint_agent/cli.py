"""
엔드포인트 목록 CLI.
- endpoint-agent --mapdir ./my-project
- endpoint-agent --mapdir ./my-project --out-file endpoints.md --format markdown
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from endpoint_agent import __version__
from endpoint_agent.config import settings
from endpoint_agent.errors import EndpointAgentError
from endpoint_agent.run import run_endpoints
from endpoint_agent.writer import FORMATS

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="endpoint-agent",
    add_completion=False,
    help="*Controller.java 파일에서 Spring *Mapping 엔드포인트 목록을 추출",
)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]endpoint-agent[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    mapdir: str = typer.Option(..., "--mapdir", "-m", help="엔드포인트를 찾을 디렉터리"),
    out_file: Optional[str] = typer.Option(None, "--out-file", "-o", help="결과를 저장할 파일명"),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="출력 디렉터리 (기본: DOC_OUTPUT_DIR/endpoints)"),
    fmt: str = typer.Option("text", "--format", "-f", help="출력 형식: text / markdown / json"),
    lenient: bool = typer.Option(False, "--lenient", help="미등록 *Mapping 어노테이션을 기록만 하고 계속 진행"),
    jobs: Optional[int] = typer.Option(None, "--jobs", "-j", min=1, help="병렬로 스캔할 파일 수"),
    follow_symlinks: bool = typer.Option(False, "--follow-symlinks", help="디렉터리 심볼릭 링크 따라가기"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="디버그 로그 출력"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="버전 출력",
    ),
):
    """디렉터리를 재귀 탐색해 Controller별 (HTTP verb, path) 목록을 출력."""
    if fmt not in FORMATS:
        raise typer.BadParameter(f"format must be one of {list(FORMATS)}", param_hint="--format")

    configure_logging(verbose)
    try:
        run_endpoints(
            mapdir,
            out_dir=out_dir,
            out_file=out_file,
            fmt=fmt,
            strict=False if lenient else None,
            jobs=jobs,
            follow_symlinks=follow_symlinks or None,
        )
    except EndpointAgentError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
