"""
Pagination pass.

measure -> split -> plan -> insert spacers bottom-to-top -> pad trailer ->
page footers -> overlay

A block that does not fit where it starts is first split at that point
(between its children, or between table rows), the remainder becoming a
continuation that starts the next page. Only blocks that cannot be split are
pushed whole.

The pass leaves nothing behind except the nodes it inserted and the splits
it made. Their ids are returned in a PaginationHandle; handing that handle to
the next pass undoes them before anything is measured, so repeated passes
over unchanged content produce the same document.
"""

import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from src.common.logger import get_logger

from .footer import render_spacer_footer
from .geometry import Measurement, PageGeometry, PaginationPlan
from .overlay import build_overlay, render_marker
from .planner import plan_breaks
from .surface import LayoutSurface, SurfaceError

DEFAULT_FOOTER_LABEL = "Results Framework"

# Upper bound on splits in one pass
MAX_SPLITS = 500


@dataclass
class PaginationHandle:
    """Nodes, splits and overrides left in the document by one pass."""
    spacer_ids: List[str] = field(default_factory=list)
    footer_ids: List[str] = field(default_factory=list)
    overlay_ids: List[str] = field(default_factory=list)
    split_ids: List[str] = field(default_factory=list)
    padding_overridden: bool = False

    @property
    def node_ids(self) -> List[str]:
        return self.spacer_ids + self.footer_ids + self.overlay_ids


@dataclass
class PaginationResult:
    """Outcome of a completed pass."""
    plan: PaginationPlan
    total_pages: int
    content_extent: float
    trailer_height: float
    document_height: float
    handle: PaginationHandle


class Paginator:
    """
    Aligns a rendered document to whole pages.

    Args:
        geometry: Page geometry
        footer_label: Static label shown in every footer
        debug: Draw the debug overlay after paginating
        template: Template name, for log context only
    """

    def __init__(
        self,
        geometry: PageGeometry,
        footer_label: str = DEFAULT_FOOTER_LABEL,
        debug: bool = False,
        template: Optional[str] = None,
    ):
        self.geometry = geometry
        self.footer_label = footer_label
        self.debug = debug
        self.template = template

    async def run(
        self,
        surface: LayoutSurface,
        previous: Optional[PaginationHandle] = None,
    ) -> Optional[PaginationResult]:
        """
        Run one pagination pass.

        Args:
            surface: Rendered document
            previous: Handle returned by the previous pass on this surface

        Returns:
            PaginationResult, or None when there was nothing to paginate or
            the surface failed mid-pass (content then stays unpaginated)
        """
        pass_id = uuid.uuid4().hex
        log = get_logger(__name__, pass_id=pass_id, template=self.template, debug_mode=self.debug)

        try:
            return await self._run(surface, previous, log)
        except SurfaceError as e:
            log.warning(f"Pagination pass aborted: {e}")
            return None

    async def clear(self, surface: LayoutSurface, handle: Optional[PaginationHandle]) -> None:
        """Remove everything a previous pass inserted and undo its splits."""
        if handle is None:
            return
        await surface.remove_nodes(handle.node_ids)
        await surface.rejoin_splits(list(reversed(handle.split_ids)))
        if handle.padding_overridden:
            await surface.set_bottom_padding(None)

    def _footer(self, page_number: int, total_pages: int, offset: float) -> str:
        return render_spacer_footer(
            self.footer_label,
            page_number,
            total_pages,
            self.geometry.footer_height,
            offset,
        )

    async def _split_overflows(
        self,
        surface: LayoutSurface,
        measurement: Measurement,
        handle: PaginationHandle,
        log,
    ) -> Tuple[Measurement, PaginationPlan]:
        """Split blocks where they overflow until none can be split further."""
        continuations: Set[int] = set()
        start = 0
        plan = plan_breaks(measurement.items, self.geometry, gap=measurement.gap)

        while len(handle.split_ids) < MAX_SPLITS:
            split_at = None
            for point in plan.overflows:
                if point.index < start:
                    continue
                split_id = await surface.split_item(point.index, point.room)
                if split_id is not None:
                    handle.split_ids.append(split_id)
                    split_at = point.index
                    break
            if split_at is None:
                break

            log.debug(f"Split item {split_at}, continuation is item {split_at + 1}")
            continuations = {i + 1 if i > split_at else i for i in continuations}
            continuations.add(split_at + 1)
            start = split_at + 1

            measurement = await surface.measure()
            plan = plan_breaks(
                measurement.items,
                self.geometry,
                gap=measurement.gap,
                continuations=continuations,
            )

        return measurement, plan

    async def _run(self, surface, previous, log) -> Optional[PaginationResult]:
        await self.clear(surface, previous)

        measurement = await surface.measure()
        if not measurement.items:
            log.debug("Container has no children, skipping pagination")
            return None

        handle = PaginationHandle()
        measurement, plan = await self._split_overflows(surface, measurement, handle, log)
        log.debug(
            f"Planned {len(plan.breaks)} breaks over {len(measurement.items)} items "
            f"(splits={len(handle.split_ids)}, shift={plan.shift:.1f}px, pages={plan.total_pages})"
        )
        for index in plan.oversized:
            log.info(f"Item {index} is taller than a page and will straddle a boundary")

        spacer_pages: Dict[str, int] = {}
        spacer_offsets: Dict[str, float] = {}

        # Bottom-to-top so earlier insertion points are untouched
        for record in reversed(plan.breaks):
            footer_html = self._footer(record.page_number, plan.total_pages, record.footer_offset)
            node_id = await surface.insert_spacer(record.before_index, record.spacer_height, footer_html)
            handle.spacer_ids.insert(0, node_id)
            spacer_pages[node_id] = record.page_number
            spacer_offsets[node_id] = record.footer_offset

        await surface.set_bottom_padding(0)
        handle.padding_overridden = True

        extent = await surface.content_extent()
        total_pages = max(plan.total_pages, self.geometry.page_count(extent))
        remaining = total_pages * self.geometry.page_height - extent

        if total_pages != plan.total_pages:
            log.info(
                f"Measured extent {extent:.1f}px needs {total_pages} pages "
                f"(planned {plan.total_pages}), relabelling footers"
            )
            for node_id in handle.spacer_ids:
                await surface.update_footer(
                    node_id,
                    self._footer(spacer_pages[node_id], total_pages, spacer_offsets[node_id]),
                )

        footed_pages = set(spacer_pages.values())
        trailer_height = 0.0
        document_height = extent
        if 0 < remaining <= measurement.gap:
            # No room for a trailer and its gap; padding closes the page
            await surface.set_bottom_padding(remaining)
            document_height = total_pages * self.geometry.page_height
        elif remaining > 0:
            # An appended trailer brings one more container gap with it
            trailer_height = remaining - measurement.gap
            trailer_footer = self._footer(
                total_pages,
                total_pages,
                trailer_height - self.geometry.footer_height,
            )
            handle.spacer_ids.append(await surface.append_spacer(trailer_height, trailer_footer))
            footed_pages.add(total_pages)
            document_height = total_pages * self.geometry.page_height

        if self.geometry.footer_height > 0:
            bare_pages = [n for n in range(1, total_pages + 1) if n not in footed_pages]
            if bare_pages:
                fragments = [
                    self._footer(n, total_pages, self.geometry.footer_top(n - 1))
                    for n in bare_pages
                ]
                handle.footer_ids = await surface.place_footers(fragments)
                log.debug(f"Placed page footers on pages {bare_pages}")

        if self.debug:
            fragments = [render_marker(m) for m in build_overlay(self.geometry, total_pages)]
            handle.overlay_ids = await surface.draw_overlay(fragments)

        log.info(
            f"Paginated into {total_pages} pages: {len(plan.breaks)} breaks, "
            f"{len(handle.split_ids)} splits, trailer {trailer_height:.1f}px"
        )
        return PaginationResult(
            plan=plan,
            total_pages=total_pages,
            content_extent=extent,
            trailer_height=trailer_height,
            document_height=document_height,
            handle=handle,
        )


async def paginate(
    surface: LayoutSurface,
    page_height: Optional[float],
    footer_height: float = 0.0,
    footer_label: str = DEFAULT_FOOTER_LABEL,
    debug: bool = False,
    previous: Optional[PaginationHandle] = None,
    margin_top: float = 0.0,
    margin_bottom: float = 0.0,
    template: Optional[str] = None,
) -> Optional[PaginationResult]:
    """
    Paginate a surface, or do nothing when no page height is configured.

    Missing or zero page height means the content renders unpaginated.

    Raises:
        ValueError: If the geometry is invalid (e.g. footer taller than a page)
    """
    if not page_height:
        return None

    geometry = PageGeometry(
        page_height=page_height,
        footer_height=footer_height,
        margin_top=margin_top,
        margin_bottom=margin_bottom,
    )
    paginator = Paginator(geometry, footer_label=footer_label, debug=debug, template=template)
    return await paginator.run(surface, previous=previous)
