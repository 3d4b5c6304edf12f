"""
Break planner.

Decides where spacers go so that no content item ends inside the footer
zone of the page it sits on. Works from a single measurement: instead of
re-measuring after every insertion, a running shift predicts where each item
will land once the spacers above it exist.
"""

import logging
from typing import Collection, Sequence

from .geometry import (
    EDGE_TOLERANCE_PX,
    MIN_SPLIT_ROOM_PX,
    BreakRecord,
    ContentItem,
    OverflowPoint,
    PageGeometry,
    PaginationPlan,
)

logger = logging.getLogger(__name__)


def plan_breaks(
    items: Sequence[ContentItem],
    geometry: PageGeometry,
    gap: float = 0.0,
    continuations: Collection[int] = (),
) -> PaginationPlan:
    """
    Plan spacer insertions for measured content.

    Single pass in document order. For each item:

    1. predicted_top = top + shift
    2. page = floor(predicted_top / page_height)
    3. If the predicted bottom stays within the page's safe zone, it fits.
    4. Else if the item is taller than a page can hold, it is left to
       overflow across the boundary (no break).
    5. Else a spacer pushes the item to the next page's content start and
       shift grows by the displacement.

    Items listed in continuations hold the remainder of a split block and
    always start a new page, oversized or not. Every item that does not fit
    where it starts is also reported as an OverflowPoint when at least
    MIN_SPLIT_ROOM_PX of it would fit there.

    Args:
        items: Content items in document order
        geometry: Page geometry
        gap: Flex/grid gap of the container; every inserted spacer adds one
        continuations: Indexes of items continuing a split block

    Returns:
        PaginationPlan with breaks and overflow points in top-to-bottom order
    """
    plan = PaginationPlan()
    if not items:
        return plan

    shift = 0.0
    content_bottom = 0.0

    for item in items:
        predicted_top = item.top + shift
        predicted_bottom = predicted_top + item.height
        page = geometry.page_of(predicted_top)

        if item.height <= 0 or predicted_bottom <= geometry.safe_zone_end(page) + EDGE_TOLERANCE_PX:
            content_bottom = max(content_bottom, predicted_bottom)
            continue

        continuation = item.index in continuations
        if not continuation:
            _add_overflow(plan, item.index, geometry.safe_zone_end(page) - predicted_top)

        oversized = item.height > geometry.capacity
        if oversized:
            plan.oversized.append(item.index)

        if oversized and not continuation:
            logger.debug(
                f"Item {item.index} ({item.height:.1f}px) exceeds page capacity "
                f"({geometry.capacity:.1f}px), leaving it to overflow"
            )
            content_bottom = max(content_bottom, predicted_bottom)
            continue

        target = geometry.content_start(page + 1)
        spacer_height = max(0.0, target - predicted_top - gap)
        displacement = spacer_height + gap

        plan.breaks.append(
            BreakRecord(
                before_index=item.index,
                spacer_top=predicted_top,
                spacer_height=spacer_height,
                page_number=page + 1,
                footer_offset=geometry.footer_top(page) - predicted_top,
            )
        )
        shift += displacement
        content_bottom = max(content_bottom, predicted_bottom + displacement)

        # Still too tall on the page it was pushed to
        if oversized:
            landing = predicted_top + displacement
            _add_overflow(plan, item.index, geometry.safe_zone_end(page + 1) - landing)

    plan.shift = shift
    plan.content_bottom = content_bottom
    plan.total_pages = geometry.page_count(content_bottom)
    return plan


def _add_overflow(plan: PaginationPlan, index: int, room: float) -> None:
    if room >= MIN_SPLIT_ROOM_PX:
        plan.overflows.append(OverflowPoint(index=index, room=room))
