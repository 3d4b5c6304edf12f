"""
Request/response models for the render service.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    timestamp: datetime
    active_captures: int
    max_concurrent: int
    playwright_ready: bool = True
    playwright_error: Optional[str] = None


class UploadResponse(BaseModel):
    uuid: str


class DeleteResponse(BaseModel):
    deleted: str


class ListResponse(BaseModel):
    items: List[Dict[str, str]] = Field(..., description="Stored records as {id, json}")
    count: int


class TemplatesResponse(BaseModel):
    templates: List[str]


class LayoutPlanItem(BaseModel):
    """One measured content child, offsets relative to the page root."""
    top: float = Field(..., description="Top offset (px)")
    height: float = Field(..., ge=0, description="Height (px)")


class LayoutPlanRequest(BaseModel):
    """Input of the pure break planner."""
    page_height: float = Field(..., gt=0, description="Page height (px)")
    footer_height: float = Field(0, ge=0, description="Footer zone height (px)")
    margin_top: float = Field(0, ge=0, description="Landing offset after a cut (px)")
    margin_bottom: float = Field(0, ge=0, description="Gap above the footer zone (px)")
    first_page_margin_top: float = Field(0, ge=0, description="Landing offset on the first page (px)")
    gap: float = Field(0, ge=0, description="Container row gap (px)")
    items: List[LayoutPlanItem] = Field(default_factory=list)


class PdfRequest(BaseModel):
    """PDF capture request for a stored record."""
    uuid: str = Field(..., min_length=1, description="Record identifier")
    template: str = Field(..., min_length=1, description="Template name")
    paperWidth: Optional[float] = Field(None, description="Page width (px)")
    paperHeight: Optional[float] = Field(None, description="Page height (px)")
    test: bool = Field(False, description="Keep the record after reading it")
    debug: bool = Field(False, description="Draw the pagination overlay")
