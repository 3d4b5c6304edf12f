"""
Version information for the report renderer.

This file is the single source of truth for version numbers.
render_service re-exports it and the FastAPI app reports it.
"""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)

# Build metadata (set by CI/CD or manually)
BUILD_DATE = "2026-10-19"
GIT_COMMIT = None  # Will be set at runtime if available
