"""
Tests for the template registry, template rendering and the page shell.
"""

import pytest

from render_service.page_shell import (
    CONTAINER_SELECTOR,
    PAGE_ROOT_SELECTOR,
    build_page_html,
    clamp_dimension,
    sanitize_for_path,
)
from src.report_templates import TemplateNotFoundError, get_template, list_templates


class TestTemplateRegistry:
    """Tests for get_template()/list_templates()."""

    def test_lists_sorted_names(self):
        assert list_templates() == ["results", "starter", "summary"]

    def test_unknown_template(self):
        with pytest.raises(TemplateNotFoundError):
            get_template("nope")

    def test_footer_labels(self):
        assert get_template("results").footer_label == "Results Framework"
        assert get_template("starter").footer_label == "Generated Report"
        assert get_template("summary").footer_label is None


class TestSummaryTemplate:
    """Tests for the summary template."""

    def test_renders_title_and_scalar_fields(self):
        html = get_template("summary").render({"title": "Water use", "result_code": 42, "tags": ["a"]})

        assert "<h1>Water use</h1>" in html
        assert "RESULT CODE" in html
        assert ">42<" in html
        assert "tags" not in html.lower()

    def test_missing_title(self):
        html = get_template("summary").render({})

        assert "No title provided" in html
        assert "field-grid" not in html

    def test_non_object_payload(self):
        html = get_template("summary").render([1, 2, 3])

        assert "No title provided" in html


class TestResultsTemplate:
    """Tests for the results template."""

    def test_one_block_per_section(self):
        payload = {
            "title": "Annual results",
            "subtitle": "2025",
            "sections": [
                {"heading": "Outcomes", "paragraphs": ["First", "Second"]},
                {"heading": "Indicators", "table": {"columns": ["Name", "Value"], "rows": [["Yield", 3]]}},
            ],
        }

        html = get_template("results").render(payload)

        assert html.count('<section class="report-section">') == 2
        assert '<p class="subtitle">2025</p>' in html
        assert "<th>Name</th>" in html
        assert "<td>Yield</td><td>3</td>" in html

    def test_escapes_payload_text(self):
        html = get_template("results").render({"title": "<script>alert(1)</script>"})

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_untitled(self):
        assert "Untitled report" in get_template("results").render({})


class TestStarterTemplate:
    """Tests for the starter template."""

    def test_block_per_key(self):
        html = get_template("starter").render({"a": 1, "b": {"c": [1, 2]}})

        assert html.count('<section class="json-block">') == 2
        assert "<h3>a</h3>" in html

    def test_empty_object(self):
        assert "Empty payload" in get_template("starter").render({})

    def test_scalar_payload(self):
        html = get_template("starter").render("hello")

        assert "&quot;hello&quot;" in html


class TestPageShell:
    """Tests for the page document builder."""

    def test_wraps_content_in_root_and_container(self):
        html = build_page_html("<section>One</section>", "Results Report", 794)

        assert '<div id="page-root">' in html
        assert '<div id="paginated-content"><section>One</section></div>' in html
        assert "width: 794px" in html
        assert "<title>Results Report</title>" in html

    def test_selectors_match_ids(self):
        assert PAGE_ROOT_SELECTOR == "#page-root"
        assert CONTAINER_SELECTOR == "#paginated-content"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, 794),
            ("600", 600),
            (600.7, 600),
            ("50", 100),
            ("99999", 5000),
            ("abc", 794),
            ("0", 794),
            ("nan", 794),
            (-20, 100),
        ],
    )
    def test_clamp_dimension(self, value, expected):
        assert clamp_dimension(value, 794) == expected

    def test_sanitize_for_path(self):
        assert sanitize_for_path("results (draft)") == "results__draft_"
