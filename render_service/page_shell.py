"""
Helper functions for building template pages.

Wraps a template's content fragment in a complete HTML document with an
explicit page root (the element whose height the PDF capture slices) and
the paginated container whose direct children are paginated.
"""

import re
from typing import Optional

from src.report_templates.base import esc

PAGE_ROOT_ID = "page-root"
CONTAINER_ID = "paginated-content"
PAGE_ROOT_SELECTOR = f"#{PAGE_ROOT_ID}"
CONTAINER_SELECTOR = f"#{CONTAINER_ID}"

MIN_DIMENSION = 100
MAX_DIMENSION = 5000


def sanitize_for_path(text: str) -> str:
    """
    Sanitize text for use in filenames.

    Removes special characters (except word chars, spaces, hyphens)
    and replaces spaces with underscores.

    Example:
        >>> sanitize_for_path("results (draft)")
        "results__draft_"
    """
    cleaned = re.sub(r'[^\w\s-]', '_', text)
    return cleaned.replace(" ", "_")


def clamp_dimension(value: Optional[float], default: int) -> int:
    """
    Clamp a requested paper dimension to [100, 5000] px.

    Missing, zero or non-numeric values fall back to the default.
    """
    try:
        number = float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        number = 0.0
    if not number or number != number:  # 0 or NaN
        number = default
    return int(max(MIN_DIMENSION, min(MAX_DIMENSION, number)))


def build_page_html(content_html: str, title: str, paper_width: int) -> str:
    """
    Build the complete HTML document for a template page.

    Args:
        content_html: Fragment produced by the template
        title: Document title
        paper_width: Page width in px; the page root is fixed to it

    Returns:
        Complete HTML document string
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width={paper_width}, initial-scale=1.0">
    <title>{esc(title)}</title>
    <style>
        * {{
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }}

        html, body {{
            background: white;
        }}

        body {{
            font-family: 'Noto Sans', Arial, Helvetica, sans-serif;
            font-size: 11px;
            line-height: 1.4;
            color: #1f2a38;
        }}

        #{PAGE_ROOT_ID} {{
            position: relative;
            width: {paper_width}px;
            margin: 0 auto;
        }}

        #{CONTAINER_ID} {{
            display: flex;
            flex-direction: column;
            padding: 0 43px 24px;
        }}

        .report-header, .summary-header {{
            border-left: 4px solid #11D4B3;
            padding: 20px 24px;
        }}

        .eyebrow {{
            font-size: 10px;
            font-weight: 700;
            color: #1a7a5a;
            letter-spacing: 0.05em;
            text-transform: uppercase;
            margin-bottom: 12px;
        }}

        h1 {{
            font-size: 20px;
            color: #02211A;
            line-height: 1.2;
        }}

        h2 {{
            font-size: 14px;
            color: #065f4a;
            margin-bottom: 8px;
        }}

        h3 {{
            font-size: 12px;
            margin-bottom: 4px;
        }}

        p {{
            margin: 0 0 6px 0;
        }}

        .subtitle {{
            margin-top: 6px;
            color: #4b5563;
        }}

        .report-section, .json-block {{
            padding: 12px 0;
        }}

        .field-grid {{
            display: grid;
            grid-template-columns: 1fr 1fr;
            gap: 12px 24px;
            padding: 16px 24px;
        }}

        .field-label {{
            font-size: 9px;
            color: #9ca3af;
            text-transform: uppercase;
            letter-spacing: 0.05em;
            margin-bottom: 2px;
        }}

        .field-value {{
            font-weight: 500;
        }}

        .data-table {{
            width: 100%;
            border-collapse: collapse;
            font-size: 9px;
        }}

        .data-table th, .data-table td {{
            border: 1px solid #e2e0df;
            padding: 4px 6px;
            text-align: left;
            vertical-align: top;
        }}

        .data-table th {{
            background: #f3f4f6;
        }}

        pre {{
            white-space: pre-wrap;
            word-break: break-word;
            font-size: 9px;
        }}
    </style>
</head>
<body>
    <div id="{PAGE_ROOT_ID}">
        <div id="{CONTAINER_ID}">{content_html}</div>
    </div>
</body>
</html>
"""
