"""Single-page result summary: title plus a two-column grid of the payload's scalar fields."""

from typing import Any

from .base import ReportTemplate, as_dict, esc


def _label(key: str) -> str:
    return key.replace("_", " ").replace("-", " ").strip().upper()


def render(data: Any) -> str:
    d = as_dict(data)
    title = d.get("title") or "No title provided"

    fields = [
        (key, value)
        for key, value in d.items()
        if key != "title" and isinstance(value, (str, int, float, bool))
    ]
    cells = "".join(
        f'<div class="field"><p class="field-label">{esc(_label(key))}</p>'
        f'<p class="field-value">{esc(value)}</p></div>'
        for key, value in fields
    )

    parts = [
        '<header class="summary-header">'
        '<div class="eyebrow">Result Summary</div>'
        f'<h1>{esc(title)}</h1>'
        '</header>'
    ]
    if cells:
        parts.append(f'<section class="field-grid">{cells}</section>')
    return "".join(parts)


TEMPLATE = ReportTemplate(name="summary", title="Result Summary", render=render)
