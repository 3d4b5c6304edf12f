"""
Template Page Routes.

- GET /admin: Admin UI
- GET /{template}/footer: Standalone footer document for external PDF tools
- GET /{template}: Render a stored record (one-shot unless test=true),
  paginated in Chromium when paperHeight is supplied
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from src.common.repositories import RecordRepositoryInterface, get_record_repository
from src.pagination import render_footer_document
from src.report_templates import TemplateNotFoundError, get_template

from .. import capture
from ..admin_page import build_admin_html
from ..config import get_settings
from ..page_shell import clamp_dimension
from ..rendering import RecordNotFoundError, TemplatePage, load_template_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def _requested_height(value: Optional[str]) -> bool:
    try:
        return value is not None and float(value) > 0
    except ValueError:
        return False


def load_page_or_404(
    repo: RecordRepositoryInterface,
    template: str,
    record_id: Optional[str],
    width: int,
    keep_record: bool,
) -> TemplatePage:
    """Load a template page, mapping lookup failures to HTTP errors."""
    try:
        return load_template_page(repo, template, record_id, width, keep_record=keep_record)
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Record not found")
    except Exception as e:
        logger.error(f"Failed to load record {record_id} for {template}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/admin", response_class=HTMLResponse)
async def admin_page() -> HTMLResponse:
    settings = get_settings()
    return HTMLResponse(build_admin_html(settings.default_paper_width, settings.default_paper_height))


@router.get("/{template}/footer", response_class=HTMLResponse)
async def template_footer(template: str) -> HTMLResponse:
    """
    Footer document for PDF engines that stamp footers themselves.

    Raises:
        HTTPException: 404 for unknown templates or templates without footers
    """
    try:
        report_template = get_template(template)
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail="Template not found")

    if not report_template.footer_label:
        raise HTTPException(status_code=404, detail="Template has no footer")

    return HTMLResponse(render_footer_document(report_template.footer_label))


@router.get("/{template}", response_class=HTMLResponse)
async def template_page(
    template: str,
    uuid: Optional[str] = Query(None, description="Record identifier"),
    paperWidth: Optional[str] = Query(None, description="Page width (px)"),
    paperHeight: Optional[str] = Query(None, description="Page height (px), enables pagination"),
    test: bool = Query(False, description="Keep the record after reading it"),
    debug: bool = Query(False, description="Draw the pagination overlay"),
    repo: RecordRepositoryInterface = Depends(get_record_repository),
) -> HTMLResponse:
    """
    Render a stored record through a template.

    Without a positive paperHeight the page is returned as flowing HTML.
    With one, it is paginated in Chromium; if that fails for any reason
    the unpaginated page is returned instead.
    """
    settings = get_settings()
    width = clamp_dimension(paperWidth, settings.default_paper_width)
    page = load_page_or_404(repo, template, uuid, width, keep_record=test)

    if not _requested_height(paperHeight):
        return HTMLResponse(page.html)

    ready, error = capture.playwright_status()
    if not ready:
        logger.warning(f"Serving {template} unpaginated, browser unavailable: {error}")
        return HTMLResponse(page.html)

    height = clamp_dimension(paperHeight, settings.default_paper_height)
    try:
        html, result = await capture.paginate_html(
            page.html,
            width,
            height,
            footer_label=page.template.footer_label,
            debug=debug,
            template=template,
        )
    except Exception as e:
        logger.warning(f"Pagination of {template} failed, serving unpaginated page: {e}")
        return HTMLResponse(page.html)

    headers = {"X-Total-Pages": str(result.total_pages)} if result else {}
    return HTMLResponse(html, headers=headers)
