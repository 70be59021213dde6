"""Markdown rendering helpers with deterministic formatting.

Tables escape pipe characters and keep column order stable so output can be
diffed and parsed.
"""
from __future__ import annotations
from typing import Any, Iterable, Sequence


def md_escape(s: str) -> str:
    """Escape pipe characters for safe Markdown table rendering."""
    return s.replace("|", "\\|")


def md_cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:.2f}"
    return md_escape(str(value))


def md_table(
    headers: Sequence[str], rows: Iterable[Sequence[Any]], numeric: Iterable[int] = ()
) -> list[str]:
    """Render a Markdown table into a list of lines (header, separator, rows).

    Column indexes listed in ``numeric`` are right-aligned.
    """
    right = set(numeric)
    lines: list[str] = []
    lines.append("| " + " | ".join(md_escape(h) for h in headers) + " |")
    lines.append(
        "| " + " | ".join("---:" if i in right else ":---" for i in range(len(headers))) + " |"
    )
    for r in rows:
        lines.append("| " + " | ".join(md_cell(c) for c in r) + " |")
    return lines
