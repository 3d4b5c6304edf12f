"""
Footer markup.

Two consumers draw the same footer: spacers injected into the paginated DOM,
and a standalone footer document handed to headless PDF capture tools
(Chromium / Gotenberg replace the `pageNumber` and `totalPages` classes at
print time). Both are built from the same bar so label text and layout
ratios stay identical.
"""

import html

FOOTER_FONT_FAMILY = "'Noto Sans', Arial, Helvetica, sans-serif"
FOOTER_FONT_SIZE_PX = 7
FOOTER_TEXT_COLOR = "#818181"
FOOTER_LABEL_COLOR = "#065f4a"
FOOTER_RULE_COLOR = "#e2e0df"
FOOTER_SIDE_PADDING_PX = 43
FOOTER_BOTTOM_PADDING_PX = 8
FOOTER_RULE_GAP_PX = 6


def _footer_bar(label: str, page_html: str, total_html: str) -> str:
    """Rule + label on the left, page counter on the right."""
    return (
        f'<div style="border-top: 1px solid {FOOTER_RULE_COLOR}; '
        f'padding-top: {FOOTER_RULE_GAP_PX}px; display: flex; '
        f'justify-content: space-between; align-items: center; width: 100%;">'
        f'<span style="color: {FOOTER_LABEL_COLOR}; font-weight: 500;">{html.escape(label)}</span>'
        f'<span>Page {page_html} of {total_html}</span>'
        f'</div>'
    )


def render_spacer_footer(
    label: str,
    page_number: int,
    total_pages: int,
    footer_height: float,
    offset: float,
) -> str:
    """
    Footer block placed inside a spacer node.

    Args:
        label: Static footer label
        page_number: 1-indexed page the footer belongs to
        total_pages: Total page count
        footer_height: Height of the footer zone (px)
        offset: Footer top relative to the spacer's top edge

    Returns:
        HTML fragment, or "" when there is no footer zone
    """
    if footer_height <= 0:
        return ""

    bar = _footer_bar(
        label,
        f'<span data-paginator-page>{page_number}</span>',
        f'<span data-paginator-total>{total_pages}</span>',
    )
    return (
        f'<div data-paginator-footer="{page_number}" style="position: absolute; '
        f'top: {offset:.2f}px; left: 0; right: 0; height: {footer_height:.2f}px; '
        f'display: flex; align-items: flex-end; box-sizing: border-box; '
        f'padding: 0 {FOOTER_SIDE_PADDING_PX}px {FOOTER_BOTTOM_PADDING_PX}px; '
        f'font-family: {FOOTER_FONT_FAMILY}; font-size: {FOOTER_FONT_SIZE_PX}px; '
        f'color: {FOOTER_TEXT_COLOR}; pointer-events: none;">'
        f'{bar}</div>'
    )


def render_footer_document(label: str) -> str:
    """
    Self-contained footer document for external PDF capture.

    No scripts and no external resources; the capture tool fills the
    `pageNumber` and `totalPages` spans.
    """
    bar = _footer_bar(
        label,
        '<span class="pageNumber" style="font-weight: 500;"></span>',
        '<span class="totalPages" style="font-weight: 500;"></span>',
    )
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
  * {{ margin: 0; padding: 0; box-sizing: border-box; }}
</style>
</head>
<body>
  <div style="font-family: {FOOTER_FONT_FAMILY}; font-size: {FOOTER_FONT_SIZE_PX}px; margin: 0; padding: 0 {FOOTER_SIDE_PADDING_PX}px {FOOTER_BOTTOM_PADDING_PX}px; color: {FOOTER_TEXT_COLOR};">
    {bar}
  </div>
</body>
</html>"""
