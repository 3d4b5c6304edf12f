"""
Template definitions.

A template maps a stored JSON payload to an HTML content fragment. Every
top-level element of the fragment becomes one content item of the paginated
container, so templates emit self-contained blocks (header, sections,
tables) rather than one large wrapper.
"""

import html
from dataclasses import dataclass
from typing import Any, Callable, Optional


class TemplateNotFoundError(Exception):
    """Raised when a template name is not registered."""


@dataclass(frozen=True)
class ReportTemplate:
    """
    A registered template.

    Attributes:
        name: URL name of the template
        title: Human-readable title (admin UI, <title>)
        render: Callable turning a payload into the content fragment
        footer_label: Label shown in page footers; None means the template
            has no footer document
    """
    name: str
    title: str
    render: Callable[[Any], str]
    footer_label: Optional[str] = None


def esc(value: Any) -> str:
    """Escape a payload value for HTML; None renders as an empty string."""
    if value is None:
        return ""
    return html.escape(str(value))


def as_dict(data: Any) -> dict:
    return data if isinstance(data, dict) else {}
