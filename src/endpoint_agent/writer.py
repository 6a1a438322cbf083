"""ScanReport → text / Markdown / JSON 출력."""
from __future__ import annotations
from pathlib import Path
from endpoint_agent.models import ScanReport

FORMATS = ("text", "markdown", "json")


def to_text(report: ScanReport) -> str:
    lines: list[str] = []
    for f in report.files:
        lines.append(f.file_name)
        for ep in f.endpoints:
            lines.append(f"\t{ep.verb.value} {ep.path}")
    return "\n".join(lines) + ("\n" if lines else "")


def to_markdown(report: ScanReport) -> str:
    lines: list[str] = []
    lines.append("# Endpoint Inventory\n")
    lines.append(f"- Root: `{report.root}`")
    lines.append(f"- Controllers: {report.file_count}")
    lines.append(f"- Total endpoints: {report.endpoint_count}\n")

    for f in report.files:
        lines.append(f"## {f.file_name}")
        lines.append(f"`{f.path}`\n")
        if not f.endpoints:
            lines.append("No endpoints found.\n")
        else:
            lines.append("| Method | Path | Line |")
            lines.append("|--------|------|------|")
            for ep in f.endpoints:
                lines.append(f"| `{ep.verb.value}` | `{ep.path or '-'}` | {ep.line_number} |")
            lines.append("")
        for u in f.unrecognized:
            lines.append(f"- Unrecognized annotation `{u.name}` (line {u.line_number})")
        if f.unrecognized:
            lines.append("")

    if report.warnings:
        lines.append("## Warnings\n")
        for w in report.warnings:
            lines.append(f"- `{w.path}`: {w.reason}")
        lines.append("")

    return "\n".join(lines)


def to_json(report: ScanReport) -> str:
    return report.model_dump_json(indent=2)


def render(report: ScanReport, fmt: str = "text") -> str:
    if fmt == "text":
        return to_text(report)
    if fmt == "markdown":
        return to_markdown(report)
    if fmt == "json":
        return to_json(report)
    raise ValueError(f"format must be one of {list(FORMATS)}")


def write_report(report: ScanReport, out_path: Path, fmt: str = "text") -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(render(report, fmt), encoding="utf-8")
    return out_path
