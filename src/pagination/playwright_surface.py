"""
Layout surface backed by a Playwright page.

Geometry is read with getBoundingClientRect() inside the page and spacer
nodes are written back through page.evaluate(). The page root and the
paginated container are passed in as explicit selectors.
"""

import asyncio
import logging
import uuid
from typing import Any, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .geometry import ContentItem, Measurement
from .surface import (
    CONTINUATION_ATTR,
    DEBUG_ATTR,
    FOOTER_ATTR,
    NODE_ID_ATTR,
    SPACER_ATTR,
    SPLIT_KIND_ATTR,
    SPLIT_ROWS_ATTR,
    SPLIT_SOURCE_ATTR,
    LayoutSurface,
    SurfaceError,
)

logger = logging.getLogger(__name__)


_MEASURE_JS = f"""
([rootSelector, containerSelector]) => {{
  const root = document.querySelector(rootSelector);
  const container = document.querySelector(containerSelector);
  if (!root || !container || !root.contains(container)) return null;
  const rootTop = root.getBoundingClientRect().top;
  const gap = parseFloat(getComputedStyle(container).rowGap) || 0;
  const items = [];
  for (const el of Array.from(container.children)) {{
    if (el.hasAttribute("{NODE_ID_ATTR}")) continue;
    const rect = el.getBoundingClientRect();
    items.push({{ top: rect.top - rootTop, height: rect.height }});
  }}
  return {{ gap, items }};
}}
"""

_INSERT_JS = f"""
({{ containerSelector, index, height, footerHtml, nodeId }}) => {{
  const container = document.querySelector(containerSelector);
  if (!container) return false;
  const spacer = document.createElement("div");
  spacer.setAttribute("{SPACER_ATTR}", index === null ? "trailer" : "break");
  spacer.setAttribute("{NODE_ID_ATTR}", nodeId);
  spacer.style.cssText = `position:relative; height:${{height}}px; flex-shrink:0; margin:0; padding:0; border:0;`;
  spacer.innerHTML = footerHtml;
  if (index === null) {{
    container.appendChild(spacer);
    return true;
  }}
  const children = Array.from(container.children).filter((el) => !el.hasAttribute("{NODE_ID_ATTR}"));
  const target = children[index];
  if (!target) return false;
  container.insertBefore(spacer, target);
  return true;
}}
"""

_UPDATE_FOOTER_JS = f"""
([nodeId, footerHtml]) => {{
  const spacer = document.querySelector(`[{NODE_ID_ATTR}="${{nodeId}}"]`);
  if (!spacer) return false;
  spacer.innerHTML = footerHtml;
  return true;
}}
"""

_EXTENT_JS = """
([rootSelector, containerSelector]) => {
  const root = document.querySelector(rootSelector);
  const container = document.querySelector(containerSelector);
  if (!root || !container) return null;
  return container.getBoundingClientRect().bottom - root.getBoundingClientRect().top;
}
"""

_PADDING_JS = """
([containerSelector, value]) => {
  const container = document.querySelector(containerSelector);
  if (!container) return false;
  container.style.paddingBottom = value === null ? "" : `${value}px`;
  return true;
}
"""

_ABSOLUTE_JS = f"""
([rootSelector, fragments, nodeIds, markerAttr, markerValue]) => {{
  const root = document.querySelector(rootSelector);
  if (!root) return false;
  if (getComputedStyle(root).position === "static") root.style.position = "relative";
  fragments.forEach((fragment, i) => {{
    const template = document.createElement("template");
    template.innerHTML = fragment.trim();
    const node = template.content.firstElementChild;
    if (!node) return;
    node.setAttribute("{NODE_ID_ATTR}", nodeIds[i]);
    if (!node.hasAttribute(markerAttr)) node.setAttribute(markerAttr, markerValue);
    root.appendChild(node);
  }});
  return true;
}}
"""

_SPLIT_JS = f"""
({{ containerSelector, index, room, splitId }}) => {{
  const container = document.querySelector(containerSelector);
  if (!container) return null;
  const children = Array.from(container.children).filter((el) => !el.hasAttribute("{NODE_ID_ATTR}"));
  const item = children[index];
  if (!item) return null;
  const hasText = Array.from(item.childNodes).some((n) => n.nodeType === Node.TEXT_NODE && n.textContent.trim());
  if (hasText) return "";
  const top = item.getBoundingClientRect().top;
  const crosses = (el) => el.getBoundingClientRect().bottom - top > room;
  const shell = (el) => {{
    const copy = el.cloneNode(false);
    copy.removeAttribute("id");
    copy.removeAttribute("{SPLIT_SOURCE_ATTR}");
    return copy;
  }};
  const inner = Array.from(item.children);
  const cross = inner.findIndex(crosses);
  if (cross < 0) return "";

  let continuation = null;
  let kind = "section";
  if (item.tagName !== "TABLE" && inner.length >= 2 && cross > 0) {{
    continuation = shell(item);
    inner.slice(cross).forEach((el) => continuation.appendChild(el));
  }} else {{
    const scope = item.tagName === "TABLE" || inner.length < 2 ? item : inner[cross];
    const table = scope.tagName === "TABLE" ? scope : scope.querySelector("table");
    if (!table) return "";
    const body = table.tBodies[0] || table;
    const rows = Array.from(body.children).filter((el) => el.tagName === "TR");
    const splitAt = rows.findIndex(crosses);
    if (rows.length < 2 || splitAt <= 0) return "";
    const tableCopy = shell(table);
    if (table.tHead) tableCopy.appendChild(table.tHead.cloneNode(true));
    const bodyCopy = document.createElement("tbody");
    rows.slice(splitAt).forEach((row) => bodyCopy.appendChild(row));
    tableCopy.appendChild(bodyCopy);
    body.setAttribute("{SPLIT_ROWS_ATTR}", splitId);
    if (table === item) {{
      continuation = tableCopy;
    }} else {{
      continuation = shell(item);
      continuation.appendChild(tableCopy);
      if (scope !== item) inner.slice(cross + 1).forEach((el) => continuation.appendChild(el));
    }}
    kind = "table";
  }}
  continuation.setAttribute("{CONTINUATION_ATTR}", splitId);
  continuation.setAttribute("{SPLIT_KIND_ATTR}", kind);
  item.setAttribute("{SPLIT_SOURCE_ATTR}", splitId);
  item.after(continuation);
  return kind;
}}
"""

_REJOIN_JS = f"""
(splitIds) => {{
  for (const splitId of splitIds) {{
    const continuation = document.querySelector(`[{CONTINUATION_ATTR}="${{splitId}}"]`);
    const source = document.querySelector(`[{SPLIT_SOURCE_ATTR}="${{splitId}}"]`);
    if (!continuation) continue;
    if (source) {{
      if (continuation.getAttribute("{SPLIT_KIND_ATTR}") === "table") {{
        const body = document.querySelector(`[{SPLIT_ROWS_ATTR}="${{splitId}}"]`);
        const table = continuation.tagName === "TABLE" ? continuation : continuation.querySelector("table");
        const moved = table ? (table.tBodies[0] || table) : null;
        if (body && moved) {{
          Array.from(moved.children)
            .filter((el) => el.tagName === "TR")
            .forEach((row) => body.appendChild(row));
        }}
        if (body) body.removeAttribute("{SPLIT_ROWS_ATTR}");
        if (continuation !== table) {{
          Array.from(continuation.children)
            .filter((el) => el !== table)
            .forEach((el) => source.appendChild(el));
        }}
      }} else {{
        while (continuation.firstChild) source.appendChild(continuation.firstChild);
      }}
      source.removeAttribute("{SPLIT_SOURCE_ATTR}");
    }}
    continuation.remove();
  }}
  return true;
}}
"""

_REMOVE_JS = f"""
(nodeIds) => {{
  const wanted = new Set(nodeIds);
  document.querySelectorAll("[{NODE_ID_ATTR}]").forEach((el) => {{
    if (wanted.has(el.getAttribute("{NODE_ID_ATTR}"))) el.remove();
  }});
  return true;
}}
"""

_SETTLE_JS = """
async () => {
  if (document.fonts && document.fonts.ready) await document.fonts.ready;
  const pending = Array.from(document.images).filter((img) => !img.complete);
  await Promise.all(pending.map((img) => new Promise((resolve) => {
    img.addEventListener("load", resolve, { once: true });
    img.addEventListener("error", resolve, { once: true });
  })));
  await new Promise((resolve) => requestAnimationFrame(() => requestAnimationFrame(resolve)));
  return true;
}
"""


class PlaywrightSurface(LayoutSurface):
    """
    DOM of a Playwright page as a layout surface.

    Args:
        page: Playwright page holding the rendered document
        root_selector: CSS selector of the page root
        container_selector: CSS selector of the paginated container
    """

    def __init__(self, page: Page, root_selector: str, container_selector: str):
        self._page = page
        self._root_selector = root_selector
        self._container_selector = container_selector
        self._token = uuid.uuid4().hex[:8]
        self._counter = 0

    def _next_id(self) -> str:
        self._counter += 1
        return f"{self._token}-{self._counter}"

    async def _evaluate(self, script: str, arg: Any = None) -> Any:
        try:
            return await self._page.evaluate(script, arg)
        except PlaywrightError as e:
            raise SurfaceError(f"Page evaluation failed: {e}") from e

    async def wait_until_settled(self, timeout_ms: int, delay_ms: int = 0) -> None:
        """
        Wait until asynchronous content affecting layout has finished loading.

        Network idle, then web fonts, then every image, then two animation
        frames so the engine has computed final geometry.

        Raises:
            SurfaceError: If readiness is not reached within timeout_ms
        """
        try:
            await self._page.wait_for_load_state("networkidle", timeout=timeout_ms)
            await asyncio.wait_for(self._page.evaluate(_SETTLE_JS), timeout=timeout_ms / 1000)
        except asyncio.TimeoutError as e:
            raise SurfaceError(f"Content did not settle within {timeout_ms}ms") from e
        except PlaywrightError as e:
            raise SurfaceError(f"Waiting for content failed: {e}") from e

        if delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000)

    async def measure(self) -> Measurement:
        result = await self._evaluate(_MEASURE_JS, [self._root_selector, self._container_selector])
        if result is None:
            raise SurfaceError(
                f"Page root '{self._root_selector}' or container "
                f"'{self._container_selector}' not found"
            )
        items = [
            ContentItem(index=i, top=float(raw["top"]), height=float(raw["height"]))
            for i, raw in enumerate(result.get("items", []))
        ]
        return Measurement(items=items, gap=float(result.get("gap") or 0.0))

    async def insert_spacer(self, before_index: int, height: float, footer_html: str) -> str:
        return await self._insert(before_index, height, footer_html)

    async def append_spacer(self, height: float, footer_html: str) -> str:
        return await self._insert(None, height, footer_html)

    async def _insert(self, index: Optional[int], height: float, footer_html: str) -> str:
        node_id = self._next_id()
        ok = await self._evaluate(
            _INSERT_JS,
            {
                "containerSelector": self._container_selector,
                "index": index,
                "height": height,
                "footerHtml": footer_html,
                "nodeId": node_id,
            },
        )
        if not ok:
            raise SurfaceError(f"Could not insert spacer before child {index}")
        return node_id

    async def update_footer(self, node_id: str, footer_html: str) -> None:
        ok = await self._evaluate(_UPDATE_FOOTER_JS, [node_id, footer_html])
        if not ok:
            raise SurfaceError(f"Spacer {node_id} not found")

    async def content_extent(self) -> float:
        extent = await self._evaluate(_EXTENT_JS, [self._root_selector, self._container_selector])
        if extent is None:
            raise SurfaceError("Page root or container disappeared before final measurement")
        return float(extent)

    async def set_bottom_padding(self, px: Optional[float]) -> None:
        ok = await self._evaluate(_PADDING_JS, [self._container_selector, px])
        if not ok:
            raise SurfaceError(f"Container '{self._container_selector}' not found")

    async def split_item(self, index: int, room: float) -> Optional[str]:
        split_id = self._next_id()
        kind = await self._evaluate(
            _SPLIT_JS,
            {
                "containerSelector": self._container_selector,
                "index": index,
                "room": room,
                "splitId": split_id,
            },
        )
        if kind is None:
            raise SurfaceError(f"Content child {index} not found")
        if not kind:
            return None
        logger.debug(f"Split child {index} at {room:.1f}px ({kind})")
        return split_id

    async def rejoin_splits(self, split_ids: List[str]) -> None:
        if not split_ids:
            return
        await self._evaluate(_REJOIN_JS, list(split_ids))

    async def place_footers(self, fragments: List[str]) -> List[str]:
        return await self._append_absolute(fragments, FOOTER_ATTR, "page")

    async def draw_overlay(self, fragments: List[str]) -> List[str]:
        return await self._append_absolute(fragments, DEBUG_ATTR, "marker")

    async def _append_absolute(self, fragments: List[str], marker_attr: str, marker_value: str) -> List[str]:
        node_ids = [self._next_id() for _ in fragments]
        ok = await self._evaluate(
            _ABSOLUTE_JS,
            [self._root_selector, fragments, node_ids, marker_attr, marker_value],
        )
        if not ok:
            raise SurfaceError(f"Page root '{self._root_selector}' not found")
        return node_ids

    async def remove_nodes(self, node_ids: List[str]) -> None:
        if not node_ids:
            return
        await self._evaluate(_REMOVE_JS, list(node_ids))
