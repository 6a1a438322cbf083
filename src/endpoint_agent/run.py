"""엔드포인트 목록 생성: Controller 스캔 → 어노테이션 파싱 → 콘솔/파일 출력."""
from __future__ import annotations
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from endpoint_agent.config import ScanConfig, settings
from endpoint_agent.models import ScanReport
from endpoint_agent.walker import walk_controllers
from endpoint_agent.writer import write_report

console = Console()


def print_report(report: ScanReport, out: Console | None = None) -> None:
    out = out or console
    for f in report.files:
        out.print(f"[bold]{escape(f.file_name)}[/bold]")
        for ep in f.endpoints:
            out.print(f"\t[cyan]{ep.verb.value}[/cyan] {escape(ep.path)}", highlight=False)
        for u in f.unrecognized:
            out.print(f"\t[red]?[/red] {escape(u.name)} (line {u.line_number})", highlight=False)


def run_endpoints(
    root: str | Path,
    out_dir: Path | None = None,
    out_file: str | None = None,
    fmt: str = "text",
    strict: bool | None = None,
    jobs: int | None = None,
    follow_symlinks: bool | None = None,
    out: Console | None = None,
) -> ScanReport:
    out = out or console
    cfg = ScanConfig.from_settings(strict=strict, jobs=jobs, follow_symlinks=follow_symlinks)
    root_path = Path(root).expanduser()

    out.print(f"[bold]Root:[/bold] {escape(str(root_path))}")
    report = walk_controllers(root_path, cfg)
    out.print(
        f"Found [green]{report.file_count}[/green] controller files, "
        f"[green]{report.endpoint_count}[/green] endpoints"
    )

    print_report(report, out)
    for w in report.warnings:
        out.print(f"[yellow]Ignoring[/yellow] {escape(w.path)}: {escape(w.reason)}", highlight=False)

    if out_file:
        base = out_dir or settings.doc_output_dir / "endpoints"
        out_path = write_report(report, base / out_file, fmt)
        out.print(f"[bold green]Endpoints:[/bold green] {out_path}")

    return report
