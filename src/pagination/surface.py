"""
Layout surface interface.

A surface is the rendered document the paginator reads geometry from and
writes spacer nodes into. The paginator only talks to this interface, so
the same pass runs against a live Chromium page or an in-memory layout.

Implementations:
- PlaywrightSurface: DOM inside a Playwright page
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .geometry import Measurement

SPACER_ATTR = "data-paginator-spacer"
DEBUG_ATTR = "data-paginator-debug"
NODE_ID_ATTR = "data-paginator-id"
FOOTER_ATTR = "data-paginator-footer"
CONTINUATION_ATTR = "data-paginator-continuation"
SPLIT_SOURCE_ATTR = "data-paginator-split-source"
SPLIT_ROWS_ATTR = "data-paginator-split-rows"
SPLIT_KIND_ATTR = "data-paginator-split"


class SurfaceError(Exception):
    """Raised when the surface cannot be read or mutated (detached, closed, missing nodes)."""


class LayoutSurface(ABC):
    """
    Abstract rendered document holding a paginated container inside a page root.

    Node identifiers returned by insert/append/draw calls are opaque strings
    that remove_nodes() accepts on a later pass.
    """

    @abstractmethod
    async def measure(self) -> Measurement:
        """
        Measure the container's content children.

        Returns:
            Measurement with items (offsets relative to the page root, in
            document order, paginator nodes excluded) and the container gap

        Raises:
            SurfaceError: If the container or page root is gone
        """
        pass

    @abstractmethod
    async def insert_spacer(self, before_index: int, height: float, footer_html: str) -> str:
        """
        Insert a spacer node before the content child at before_index.

        Args:
            before_index: Index among content children (paginator nodes ignored)
            height: Spacer height (px)
            footer_html: Footer fragment placed inside the spacer

        Returns:
            Node identifier
        """
        pass

    @abstractmethod
    async def append_spacer(self, height: float, footer_html: str) -> str:
        """Append a spacer node as the container's last child."""
        pass

    @abstractmethod
    async def update_footer(self, node_id: str, footer_html: str) -> None:
        """Replace the footer fragment inside an existing spacer."""
        pass

    @abstractmethod
    async def content_extent(self) -> float:
        """Bottom edge of the container relative to the page root top (px)."""
        pass

    @abstractmethod
    async def set_bottom_padding(self, px: Optional[float]) -> None:
        """Override the container's bottom padding; None restores the stylesheet value."""
        pass

    @abstractmethod
    async def split_item(self, index: int, room: float) -> Optional[str]:
        """
        Split a content child so its first part fits in room px.

        A block whose children run past room keeps the children that fit and
        moves the rest into a continuation sibling. When the first child
        already crosses, a table inside it is split between rows instead and
        the continuation repeats the table head. The continuation is an
        ordinary content child for later measurements.

        Args:
            index: Index among content children
            room: Height from the child's top edge that fits on its page

        Returns:
            Identifier of the split, or None when the child cannot be split
        """
        pass

    @abstractmethod
    async def rejoin_splits(self, split_ids: List[str]) -> None:
        """Undo splits, newest first, moving continuation content back."""
        pass

    @abstractmethod
    async def place_footers(self, fragments: List[str]) -> List[str]:
        """Append absolutely positioned footer fragments to the page root."""
        pass

    @abstractmethod
    async def draw_overlay(self, fragments: List[str]) -> List[str]:
        """Append absolutely positioned debug fragments to the page root."""
        pass

    @abstractmethod
    async def remove_nodes(self, node_ids: List[str]) -> None:
        """Remove nodes created by an earlier pass. Unknown ids are ignored."""
        pass
