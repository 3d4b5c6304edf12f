"""
Pagination engine.

Slices a continuously flowing HTML document into fixed-height pages for PDF
capture: measures the container's children, splits sections and tables that
run past a page, plans where spacers must go so nothing ends inside a footer
zone, inserts spacer/footer nodes, gives every page a footer and pads the
document to an exact multiple of the page height.

Public API:
- paginate(): One pass with a fresh geometry (no-op without a page height)
- Paginator: Reusable pass runner bound to a PageGeometry
- plan_breaks(): Pure break planner
- LayoutSurface: Interface to the rendered document

Usage:
    from src.pagination import paginate
    from src.pagination.playwright_surface import PlaywrightSurface

    surface = PlaywrightSurface(page, "#page-root", "#paginated-content")
    await surface.wait_until_settled(timeout_ms=10000)
    result = await paginate(surface, page_height=1123, footer_height=40)
"""

from .footer import render_footer_document, render_spacer_footer
from .geometry import (
    BreakRecord,
    ContentItem,
    Measurement,
    OverflowPoint,
    PageGeometry,
    PaginationPlan,
)
from .overlay import OverlayMarker, build_overlay
from .paginator import (
    DEFAULT_FOOTER_LABEL,
    PaginationHandle,
    PaginationResult,
    Paginator,
    paginate,
)
from .planner import plan_breaks
from .surface import LayoutSurface, SurfaceError

__all__ = [
    "paginate",
    "Paginator",
    "PaginationHandle",
    "PaginationResult",
    "DEFAULT_FOOTER_LABEL",
    "plan_breaks",
    "PageGeometry",
    "ContentItem",
    "Measurement",
    "OverflowPoint",
    "BreakRecord",
    "PaginationPlan",
    "LayoutSurface",
    "SurfaceError",
    "OverlayMarker",
    "build_overlay",
    "render_spacer_footer",
    "render_footer_document",
]
