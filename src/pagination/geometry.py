"""
Page geometry and pagination data types.

All measurements are CSS pixels relative to the top edge of the page root,
the element whose total height the PDF capture slices into fixed-height
pages.
"""

import math
from dataclasses import dataclass, field
from typing import List

# Sub-pixel slack when comparing measured edges against page boundaries.
EDGE_TOLERANCE_PX = 0.01

# Smallest room left on a page worth splitting a block into.
MIN_SPLIT_ROOM_PX = 80


@dataclass(frozen=True)
class PageGeometry:
    """
    Vertical layout of one physical page.

    Attributes:
        page_height: Height of a physical page (px, > 0)
        footer_height: Reserved footer zone at the bottom of every page
        margin_top: Breathing room after a page cut; pushed content lands here
        margin_bottom: Space kept between the last content line and the footer
        first_page_margin_top: Landing offset for page 1 (the header already
            provides spacing there)
    """
    page_height: float
    footer_height: float = 0.0
    margin_top: float = 0.0
    margin_bottom: float = 0.0
    first_page_margin_top: float = 0.0

    def __post_init__(self):
        if not self.page_height or self.page_height <= 0:
            raise ValueError(f"page_height must be positive, got {self.page_height}")
        if self.footer_height < 0:
            raise ValueError(f"footer_height must be non-negative, got {self.footer_height}")
        if self.footer_height >= self.page_height:
            raise ValueError(
                f"footer_height ({self.footer_height}) must be smaller than "
                f"page_height ({self.page_height})"
            )
        if self.margin_top < 0 or self.margin_bottom < 0 or self.first_page_margin_top < 0:
            raise ValueError("page margins must be non-negative")
        if self.capacity <= 0:
            raise ValueError("margins leave no room for content on a page")

    @property
    def usable_height(self) -> float:
        """Page height minus the footer zone."""
        return self.page_height - self.footer_height

    @property
    def capacity(self) -> float:
        """Tallest item that can sit between a page's content start and safe-zone end."""
        return self.usable_height - self.margin_top - self.margin_bottom

    def page_of(self, y: float) -> int:
        """0-indexed page containing the offset y."""
        return int(math.floor(y / self.page_height))

    def safe_zone_end(self, page: int) -> float:
        """Lowest offset content may reach on a page without entering the footer zone."""
        return (page + 1) * self.page_height - self.footer_height - self.margin_bottom

    def footer_top(self, page: int) -> float:
        return (page + 1) * self.page_height - self.footer_height

    def content_start(self, page: int) -> float:
        if page == 0:
            return self.first_page_margin_top
        return page * self.page_height + self.margin_top

    def page_count(self, extent: float) -> int:
        """Number of pages needed to hold content reaching down to extent."""
        if extent <= 0:
            return 1
        return max(1, int(math.ceil((extent - EDGE_TOLERANCE_PX) / self.page_height)))


@dataclass(frozen=True)
class ContentItem:
    """One direct child of the paginated container as measured."""
    index: int
    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class Measurement:
    """Result of one walk over the container's children."""
    items: List[ContentItem]
    gap: float = 0.0


@dataclass(frozen=True)
class BreakRecord:
    """
    A spacer to insert before a content item.

    Attributes:
        before_index: Index of the content item the spacer goes in front of
        spacer_top: Predicted offset where the spacer starts
        spacer_height: Height of the spacer (px)
        page_number: 1-indexed page the spacer closes; its footer sits there
        footer_offset: Footer top relative to spacer_top
    """
    before_index: int
    spacer_top: float
    spacer_height: float
    page_number: int
    footer_offset: float


@dataclass(frozen=True)
class OverflowPoint:
    """
    A place where an item could be split instead of pushed.

    Attributes:
        index: Index of the content item that does not fit
        room: Height of the item (from its own top edge) that fits on the
            page it starts on
    """
    index: int
    room: float


@dataclass
class PaginationPlan:
    """Output of the break planner."""
    breaks: List[BreakRecord] = field(default_factory=list)
    shift: float = 0.0
    content_bottom: float = 0.0
    total_pages: int = 0
    oversized: List[int] = field(default_factory=list)
    overflows: List[OverflowPoint] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "breaks": [
                {
                    "before_index": b.before_index,
                    "spacer_top": b.spacer_top,
                    "spacer_height": b.spacer_height,
                    "page_number": b.page_number,
                    "footer_offset": b.footer_offset,
                }
                for b in self.breaks
            ],
            "shift": self.shift,
            "content_bottom": self.content_bottom,
            "total_pages": self.total_pages,
            "oversized": list(self.oversized),
        }
