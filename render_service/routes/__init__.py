"""
Render service route modules.

Each module handles a specific area of functionality. The pages router
owns the catch-all /{template} path and must be included last.
"""

from .records import router as records_router
from .layout import router as layout_router
from .pdf import router as pdf_router
from .pages import router as pages_router

__all__ = [
    "records_router",
    "layout_router",
    "pdf_router",
    "pages_router",
]
