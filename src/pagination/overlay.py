"""
Debug overlay for visual QA of page boundaries.

Markers are absolutely positioned on the page root with pointer events
disabled, so they never take part in layout.
"""

from dataclasses import dataclass
from typing import List

from .geometry import PageGeometry

CUT_COLOR = "red"
ZONE_COLOR = "orange"
START_COLOR = "#065f4a"


@dataclass(frozen=True)
class OverlayMarker:
    kind: str  # "cut", "zone" or "start"
    top: float
    height: float
    label: str


def build_overlay(geometry: PageGeometry, total_pages: int) -> List[OverlayMarker]:
    """
    Markers for every page: a cut line at each boundary but the last, a
    shaded footer-exclusion zone, and a content-start line on pages after
    the first when a top margin is configured.
    """
    markers: List[OverlayMarker] = []
    for page in range(total_pages):
        boundary = (page + 1) * geometry.page_height
        if page < total_pages - 1:
            markers.append(OverlayMarker("cut", boundary, 0.0, f"CUT {boundary:g}px"))

        zone_top = geometry.safe_zone_end(page)
        markers.append(
            OverlayMarker("zone", zone_top, boundary - zone_top, f"FOOTER ZONE p{page + 1}")
        )

        if page > 0 and geometry.margin_top > 0:
            markers.append(
                OverlayMarker(
                    "start",
                    geometry.content_start(page),
                    0.0,
                    f"CONTENT START p{page + 1}",
                )
            )
    return markers


def render_marker(marker: OverlayMarker) -> str:
    """HTML for one marker, positioned against the page root."""
    base = (
        f"position:absolute; top:{marker.top:.2f}px; left:0; right:0; "
        "pointer-events:none;"
    )
    label_base = (
        "position:absolute; color:white; font-size:9px; padding:1px 6px; "
        "border-radius:2px; font-family:monospace;"
    )
    if marker.kind == "cut":
        style = f"{base} border-top:2px dashed {CUT_COLOR}; z-index:9999;"
        label_style = f"{label_base} top:-14px; right:20px; background:{CUT_COLOR};"
    elif marker.kind == "zone":
        style = (
            f"{base} height:{marker.height:.2f}px; background:rgba(255,140,0,0.12); "
            f"border-top:1px dashed {ZONE_COLOR}; z-index:9998;"
        )
        label_style = f"{label_base} top:-14px; left:20px; background:{ZONE_COLOR};"
    else:
        style = f"{base} border-top:1px dashed {START_COLOR}; z-index:9999;"
        label_style = f"{label_base} top:2px; left:20px; background:{START_COLOR};"

    return (
        f'<div data-paginator-debug="{marker.kind}" style="{style}">'
        f'<span style="{label_style}">{marker.label}</span></div>'
    )
