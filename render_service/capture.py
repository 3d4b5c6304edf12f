"""
Chromium capture sessions.

Each capture launches Chromium, loads a template page, waits for it to
settle, runs one pagination pass and then either serializes the paginated
DOM or prints it to PDF. Concurrency is bounded by a semaphore sized from
MAX_CONCURRENT_CAPTURES.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Tuple

from src.pagination import PaginationResult, SurfaceError, paginate
from src.pagination.playwright_surface import PlaywrightSurface

from .config import get_settings
from .page_shell import CONTAINER_SELECTOR, PAGE_ROOT_SELECTOR

logger = logging.getLogger(__name__)

# Semaphore for rate limiting, created on first use
_capture_semaphore: Optional[asyncio.Semaphore] = None

# Playwright readiness state
_playwright_ready = False
_playwright_error: Optional[str] = None


class CaptureOverloadedError(Exception):
    """Raised when every capture slot is taken."""


def _semaphore() -> asyncio.Semaphore:
    global _capture_semaphore
    if _capture_semaphore is None:
        _capture_semaphore = asyncio.Semaphore(get_settings().max_concurrent_captures)
    return _capture_semaphore


def active_captures() -> int:
    """Number of captures currently holding a slot."""
    if _capture_semaphore is None:
        return 0
    return get_settings().max_concurrent_captures - _capture_semaphore._value


def is_overloaded() -> bool:
    return _semaphore()._value <= 0


def playwright_status() -> Tuple[bool, Optional[str]]:
    """(ready, error) as recorded by the startup probe."""
    return _playwright_ready, _playwright_error


def reset_capture_state() -> None:
    """Forget the semaphore and probe result (settings changed, tests)."""
    global _capture_semaphore, _playwright_ready, _playwright_error
    _capture_semaphore = None
    _playwright_ready = False
    _playwright_error = None


async def validate_playwright() -> bool:
    """
    Validate Playwright/Chromium is properly installed.

    Renders a tiny page and prints it; the service reports unhealthy until
    this succeeds.
    """
    global _playwright_ready, _playwright_error

    settings = get_settings()
    logger.info("Validating Playwright installation...")

    try:
        from playwright.async_api import async_playwright

        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=settings.playwright_headless)
            page = await browser.new_page()
            await page.set_content("<html><body><h1>Test</h1></body></html>")
            test_pdf = await page.pdf(width="200px", height="200px")
            await browser.close()

        if len(test_pdf) > 0:
            _playwright_ready = True
            _playwright_error = None
            logger.info(f"Playwright validation successful - generated {len(test_pdf)} byte test PDF")
        else:
            _playwright_error = "Test PDF generation returned empty result"
            logger.error(f"Playwright validation failed: {_playwright_error}")

    except Exception as e:
        _playwright_ready = False
        _playwright_error = str(e)
        logger.error(f"Playwright validation failed: {_playwright_error}")
        logger.error("Paginated pages and PDF capture will not work until this is resolved.")

    return _playwright_ready


@asynccontextmanager
async def _open_page(width: int, height: int) -> AsyncIterator:
    """Launch Chromium and yield a page with a width x height viewport."""
    # Import here to avoid loading Playwright on startup
    from playwright.async_api import async_playwright

    settings = get_settings()
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=settings.playwright_headless)
        try:
            page = await browser.new_page(viewport={"width": width, "height": height})
            page.set_default_timeout(settings.playwright_timeout)
            await page.emulate_media(media="screen")
            yield page
        finally:
            await browser.close()


async def _paginate_page(
    page,
    html: str,
    page_height: int,
    footer_label: Optional[str],
    debug: bool,
    template: Optional[str],
) -> Optional[PaginationResult]:
    settings = get_settings()

    await page.set_content(html, wait_until="load")
    surface = PlaywrightSurface(page, PAGE_ROOT_SELECTOR, CONTAINER_SELECTOR)

    try:
        await surface.wait_until_settled(settings.settle_timeout_ms, settings.settle_delay_ms)
    except SurfaceError as e:
        logger.warning(f"Measuring before content settled: {e}")

    # Templates without a footer label paginate on bare page boundaries
    return await paginate(
        surface,
        page_height=page_height,
        footer_height=settings.footer_height if footer_label else 0,
        footer_label=footer_label or "",
        debug=debug,
        margin_top=settings.page_margin_top,
        margin_bottom=settings.page_margin_bottom,
        template=template,
    )


async def paginate_html(
    html: str,
    width: int,
    height: int,
    footer_label: Optional[str] = None,
    debug: bool = False,
    template: Optional[str] = None,
) -> Tuple[str, Optional[PaginationResult]]:
    """
    Paginate a template page in Chromium and serialize the result.

    Args:
        html: Complete page document
        width: Page width (px)
        height: Page height (px)
        footer_label: Footer label, None for no footers
        debug: Draw the debug overlay
        template: Template name, for logging

    Returns:
        (html, result): the paginated document and its pass result. When
        no pass completed, the document is the unpaginated input and the
        result is None.

    Raises:
        CaptureOverloadedError: If no capture slot is free
    """
    if is_overloaded():
        logger.warning("Capture slots exhausted, rejecting pagination request")
        raise CaptureOverloadedError("Too many concurrent captures")

    async with _semaphore():
        logger.info(f"Paginating {template or 'page'} at {width}x{height}px")
        async with _open_page(width, height) as page:
            result = await _paginate_page(page, html, height, footer_label, debug, template)
            if result is None:
                return html, None
            return await page.content(), result


async def render_pdf(
    html: str,
    width: int,
    height: int,
    footer_label: Optional[str] = None,
    debug: bool = False,
    template: Optional[str] = None,
) -> bytes:
    """
    Paginate a template page and print it as width x height px PDF pages.

    A failed pagination pass still prints the unpaginated document.

    Raises:
        CaptureOverloadedError: If no capture slot is free
    """
    if is_overloaded():
        logger.warning("Capture slots exhausted, rejecting PDF request")
        raise CaptureOverloadedError("Too many concurrent captures")

    async with _semaphore():
        logger.info(f"Starting PDF capture of {template or 'page'} at {width}x{height}px")
        async with _open_page(width, height) as page:
            result = await _paginate_page(page, html, height, footer_label, debug, template)
            pdf_bytes = await page.pdf(
                width=f"{width}px",
                height=f"{height}px",
                print_background=True,
                margin={"top": "0px", "right": "0px", "bottom": "0px", "left": "0px"},
            )

        pages = result.total_pages if result else "unpaginated"
        logger.info(f"PDF capture completed ({pages} pages, {len(pdf_bytes)} bytes)")
        return pdf_bytes
