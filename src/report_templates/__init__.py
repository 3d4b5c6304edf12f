"""
Template registry.

Templates are looked up by the name used in page URLs (/{template}).
"""

from typing import Dict, List

from . import results, starter, summary
from .base import ReportTemplate, TemplateNotFoundError

TEMPLATES: Dict[str, ReportTemplate] = {
    t.name: t for t in (results.TEMPLATE, starter.TEMPLATE, summary.TEMPLATE)
}


def get_template(name: str) -> ReportTemplate:
    """
    Look up a template by name.

    Raises:
        TemplateNotFoundError: If no template is registered under name
    """
    try:
        return TEMPLATES[name]
    except KeyError:
        raise TemplateNotFoundError(f"Unknown template: {name}") from None


def list_templates() -> List[str]:
    """Registered template names, sorted."""
    return sorted(TEMPLATES)


__all__ = [
    "ReportTemplate",
    "TemplateNotFoundError",
    "TEMPLATES",
    "get_template",
    "list_templates",
]
