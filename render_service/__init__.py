"""
Render Service - HTTP front end of the report renderer.

Stores JSON payloads, renders them through named templates, paginates the
result in Chromium and prints fixed-size PDF pages.
"""

from version import __version__  # noqa: F401
