"""
PDF Capture Route.

- POST /api/pdf: Render a stored record, paginate it and print fixed-size
  PDF pages
"""

import asyncio
import logging
from io import BytesIO

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from src.common.repositories import RecordRepositoryInterface, get_record_repository

from .. import capture
from ..config import get_settings
from ..models import PdfRequest
from ..page_shell import clamp_dimension, sanitize_for_path
from .pages import load_page_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["pdf"])


@router.post("/pdf")
async def render_record_pdf(
    request: PdfRequest,
    repo: RecordRepositoryInterface = Depends(get_record_repository),
):
    """
    Capture a stored record as a PDF.

    Returns:
        StreamingResponse with PDF binary data

    Raises:
        HTTPException: 404 for unknown template/record, 500 for rendering
            failures, 503 when overloaded or the browser is unavailable
    """
    settings = get_settings()

    ready, error = capture.playwright_status()
    if not ready:
        raise HTTPException(
            status_code=503,
            detail=f"PDF capture unavailable - Playwright/Chromium not ready: {error}",
        )

    if capture.is_overloaded():
        logger.warning("Render service overloaded, rejecting PDF request")
        raise HTTPException(
            status_code=503,
            detail="Service overloaded. Too many concurrent captures.",
        )

    width = clamp_dimension(request.paperWidth, settings.default_paper_width)
    height = clamp_dimension(request.paperHeight, settings.default_paper_height)
    page = load_page_or_404(repo, request.template, request.uuid, width, keep_record=request.test)

    try:
        pdf_bytes = await capture.render_pdf(
            page.html,
            width,
            height,
            footer_label=page.template.footer_label,
            debug=request.debug,
            template=request.template,
        )
    except capture.CaptureOverloadedError:
        raise HTTPException(
            status_code=503,
            detail="Service overloaded. Too many concurrent captures.",
        )
    except asyncio.TimeoutError:
        logger.error("PDF capture timed out")
        raise HTTPException(
            status_code=500,
            detail=f"Rendering timed out after {settings.playwright_timeout}ms",
        )
    except Exception as e:
        logger.error(f"PDF capture failed: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Rendering failed: {str(e)}")

    filename = f"{sanitize_for_path(request.template)}_{sanitize_for_path(request.uuid)}.pdf"
    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
