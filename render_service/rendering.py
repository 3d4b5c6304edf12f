"""
Template page assembly.

Resolves a template, reads the stored payload for a record and builds the
page document. Reading a record consumes it unless the request is a test
render.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.common.repositories import RecordRepositoryInterface
from src.report_templates import ReportTemplate, get_template

from .page_shell import build_page_html

logger = logging.getLogger(__name__)


class RecordNotFoundError(Exception):
    """Raised when a page is requested for a missing or unknown record."""


@dataclass
class TemplatePage:
    """A template rendered for one record."""
    template: ReportTemplate
    record_id: str
    html: str
    width: int


def load_template_page(
    repository: RecordRepositoryInterface,
    template_name: str,
    record_id: Optional[str],
    width: int,
    keep_record: bool = False,
) -> TemplatePage:
    """
    Render a stored record through a template.

    Args:
        repository: Record store
        template_name: Registered template name
        record_id: Record identifier from the page URL
        width: Page width (px)
        keep_record: Leave the record in the store (test renders)

    Raises:
        TemplateNotFoundError: Unknown template
        RecordNotFoundError: Missing or unknown record id
        RecordStoreError: Store read failed
    """
    template = get_template(template_name)

    if not record_id:
        raise RecordNotFoundError("No record id supplied")

    data = repository.get(record_id)
    if data is None:
        raise RecordNotFoundError(f"Record {record_id} not found")

    if not keep_record:
        try:
            repository.delete(record_id)
        except Exception as e:
            logger.warning(f"Could not delete consumed record {record_id}: {e}")

    content_html = template.render(data)
    return TemplatePage(
        template=template,
        record_id=record_id,
        html=build_page_html(content_html, template.title, width),
        width=width,
    )
