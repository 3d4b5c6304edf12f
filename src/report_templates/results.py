"""
Multi-page results report.

Payload:
    {
        "title": "...",
        "subtitle": "...",
        "sections": [
            {
                "heading": "...",
                "paragraphs": ["...", "..."],
                "table": {"columns": ["..."], "rows": [["...", "..."]]}
            }
        ]
    }

Each section is emitted as its own block so the paginator can split it
between its children or table rows, or push it whole to the next page.
"""

from typing import Any, Dict, List

from .base import ReportTemplate, as_dict, esc

FOOTER_LABEL = "Results Framework"


def _render_table(table: Dict[str, Any]) -> str:
    columns: List[Any] = table.get("columns") or []
    rows: List[Any] = table.get("rows") or []
    if not columns and not rows:
        return ""

    head = "".join(f"<th>{esc(c)}</th>" for c in columns)
    body = "".join(
        "<tr>" + "".join(f"<td>{esc(cell)}</td>" for cell in (row if isinstance(row, list) else [row])) + "</tr>"
        for row in rows
    )
    thead = f"<thead><tr>{head}</tr></thead>" if head else ""
    return f'<table class="data-table">{thead}<tbody>{body}</tbody></table>'


def _render_section(section: Any) -> str:
    s = as_dict(section)
    parts = []
    if s.get("heading"):
        parts.append(f"<h2>{esc(s['heading'])}</h2>")
    for paragraph in s.get("paragraphs") or []:
        parts.append(f"<p>{esc(paragraph)}</p>")
    if isinstance(s.get("table"), dict):
        parts.append(_render_table(s["table"]))
    return f'<section class="report-section">{"".join(parts)}</section>'


def render(data: Any) -> str:
    d = as_dict(data)
    header = (
        '<header class="report-header">'
        f'<div class="eyebrow">{esc(FOOTER_LABEL)}</div>'
        f'<h1>{esc(d.get("title") or "Untitled report")}</h1>'
    )
    if d.get("subtitle"):
        header += f'<p class="subtitle">{esc(d["subtitle"])}</p>'
    header += "</header>"

    sections = d.get("sections") or []
    return header + "".join(_render_section(s) for s in sections)


TEMPLATE = ReportTemplate(
    name="results",
    title="Results Report",
    render=render,
    footer_label=FOOTER_LABEL,
)
