"""Unit tests for TemplateRegistry class and HTML rendering."""

import pytest
from jinja2 import TemplateNotFound

from folio.contexts.rendering import (
    TemplateRegistry,
    render_export_html,
    render_interactive_html,
    render_view,
)
from folio.contexts.rendering.html import DOWNLOAD_LABEL, css


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()
    assert registry.templates_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
def test_template_caching():
    """Test that templates are cached after first load."""
    registry = TemplateRegistry()

    template1 = registry.get_template("interactive.html.jinja")
    assert registry.is_cached("interactive.html.jinja")

    template2 = registry.get_template("interactive.html.jinja")
    assert template1 is template2

    registry.clear_cache()
    assert not registry.is_cached("interactive.html.jinja")


@pytest.mark.unit
def test_get_template_not_found():
    """Test error handling for missing template."""
    registry = TemplateRegistry()

    with pytest.raises(TemplateNotFound):
        registry.get_template("nonexistent.html.jinja")


@pytest.mark.unit
def test_css_filter():
    """Test inline CSS serialization of style pairs."""
    assert css((("color", "#000000"), ("padding-top", "80px"))) == "color: #000000; padding-top: 80px"
    assert css(()) == ""


@pytest.mark.unit
def test_interactive_page_has_download_toolbar(full_document, raw_projects):
    """Test that the interactive page carries the download button."""
    view = render_view(full_document, raw_projects, identifier="ada")
    html = render_interactive_html(view.tree, view.styles, title="Ada", download_href="/export/ada")

    assert DOWNLOAD_LABEL in html
    assert 'href="/export/ada"' in html
    assert 'class="folio-toolbar"' in html


@pytest.mark.unit
def test_export_page_has_no_toolbar(full_document, raw_projects):
    """Test that exported HTML is the bare document tree."""
    view = render_view(full_document, raw_projects, identifier="ada")
    html = render_export_html(view.tree, title="Ada")

    assert DOWNLOAD_LABEL not in html
    assert "Ada Lovelace" in html
    assert '<section id="contact"' in html


@pytest.mark.unit
def test_interactive_and_export_share_document_markup(full_document, raw_projects):
    """Test that both pages serialize the same tree the same way."""
    view = render_view(full_document, raw_projects, identifier="ada")
    interactive = render_interactive_html(view.tree, view.styles, title="Ada")
    export = render_export_html(view.tree, title="Ada")

    start = export.index('<div class="folio-page"')
    end = export.rindex("</body>")
    assert export[start:end] in interactive


@pytest.mark.unit
def test_author_text_is_escaped():
    """Test that author-provided text cannot inject markup."""
    view = render_view({"hero": {"title": "<script>alert(1)</script>"}})
    html = render_export_html(view.tree, title="x")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


@pytest.mark.unit
def test_external_links_open_in_new_tab(full_document):
    """Test that LinkedIn and GitHub rows open in a new tab."""
    view = render_view(full_document)
    html = render_export_html(view.tree, title="x")

    assert 'href="https://github.com/ada" target="_blank"' in html
    assert 'href="mailto:ada@example.com" data-method="email"' in html
