"""Starter template: every top-level key of the payload as a titled JSON block."""

import json
from typing import Any

from .base import ReportTemplate, esc


def render(data: Any) -> str:
    if not isinstance(data, dict):
        return f'<section class="json-block"><pre>{esc(json.dumps(data, indent=2))}</pre></section>'

    blocks = []
    for key, value in data.items():
        blocks.append(
            '<section class="json-block">'
            f"<h3>{esc(key)}</h3>"
            f"<pre>{esc(json.dumps(value, indent=2, ensure_ascii=False))}</pre>"
            "</section>"
        )
    return "".join(blocks) or '<p class="empty">Empty payload</p>'


TEMPLATE = ReportTemplate(
    name="starter",
    title="Starter",
    render=render,
    footer_label="Generated Report",
)
