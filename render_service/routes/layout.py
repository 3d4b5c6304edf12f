"""
Template & Layout API Routes.

- GET /api/templates: Registered template names
- POST /api/layout/plan: Run the break planner on supplied measurements
"""

from fastapi import APIRouter, HTTPException

from src.pagination import ContentItem, PageGeometry, plan_breaks
from src.report_templates import list_templates

from ..models import LayoutPlanRequest, TemplatesResponse

router = APIRouter(prefix="/api", tags=["layout"])


@router.get("/templates", response_model=TemplatesResponse)
async def get_templates() -> TemplatesResponse:
    return TemplatesResponse(templates=list_templates())


@router.post("/layout/plan")
async def plan_layout(request: LayoutPlanRequest) -> dict:
    """
    Plan page breaks for measured content without a browser.

    Items are taken in document order; their index is their position in
    the request.

    Raises:
        HTTPException: 422 if the page geometry leaves no room for content
    """
    try:
        geometry = PageGeometry(
            page_height=request.page_height,
            footer_height=request.footer_height,
            margin_top=request.margin_top,
            margin_bottom=request.margin_bottom,
            first_page_margin_top=request.first_page_margin_top,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    items = [
        ContentItem(index=i, top=item.top, height=item.height)
        for i, item in enumerate(request.items)
    ]
    return plan_breaks(items, geometry, gap=request.gap).to_dict()
