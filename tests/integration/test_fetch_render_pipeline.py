"""
Integration tests for the viewer pipeline - fetch over a mocked HTTP service, resolve,
style, render to HTML and export from the same tree.
"""

import httpx
import pytest

from folio.contexts.export import ExportJob, ExportOptions, ExportState
from folio.contexts.rendering import render_export_html, render_interactive_html, render_view
from folio.contexts.retrieval import FetchStatus, PortfolioApiClient, PublicDocumentFetcher


class CapturingWriter:
    def __init__(self, tmp_path):
        self.tmp_path = tmp_path
        self.snapshots = []

    def write(self, snapshot, filename, options):
        self.snapshots.append(snapshot)
        return self.tmp_path / filename


def _service(documents):
    """Mock persistence service: identifier -> (status, body)."""

    def handler(request):
        identifier = request.url.path.rsplit("/", 1)[-1]
        status, body = documents.get(identifier, (404, {"message": "Portfolio not found"}))
        return httpx.Response(status, json=body)

    return PortfolioApiClient(base_url="http://api.test/api", transport=httpx.MockTransport(handler))


@pytest.mark.integration
@pytest.mark.asyncio
async def test_fetch_render_export_share_one_tree(full_document, raw_projects, notifier, tmp_path):
    """Test that the exported snapshot is the tree the visitor sees."""
    client = _service({"ada": (200, {"portfolio": full_document, "projects": raw_projects})})
    fetcher = PublicDocumentFetcher(client, notifier=notifier, record_events=False)

    outcome = await fetcher.load("ada")
    assert outcome.status is FetchStatus.SUCCESS

    view = render_view(outcome.document, outcome.projects, identifier="ada")
    html = render_interactive_html(view.tree, view.styles, title=view.document.hero.title)
    assert "Note G" in html

    writer = CapturingWriter(tmp_path)
    job = ExportJob("ada", writer=writer, options=ExportOptions(), notifier=notifier, record_events=False)
    await job.start(view.tree)

    assert job.state is ExportState.SUCCEEDED
    assert writer.snapshots == [view.tree]
    assert render_export_html(writer.snapshots[0], title="ada") == render_export_html(view.tree, title="ada")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_sparse_document_renders_with_defaults(notifier):
    """Test that a nearly empty stored document renders the default template."""
    client = _service({"new": (200, {"portfolio": {"theme": "dark"}, "projects": []})})
    fetcher = PublicDocumentFetcher(client, notifier=notifier, record_events=False)

    outcome = await fetcher.load("new")
    view = render_view(outcome.document, outcome.projects, identifier="new")

    assert view.document.hero.title == "My Portfolio"
    assert view.styles.theme == "dark"
    assert view.tree.section("projects").find_all("card") == ()
    assert view.tree.section("contact").find_all("contact_row") == ()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_unknown_identifier_is_not_found(notifier):
    """Test that a 404 from the service reaches the viewer as NotFound."""
    fetcher = PublicDocumentFetcher(_service({}), notifier=notifier, record_events=False)

    outcome = await fetcher.load("ghost")

    assert outcome.status is FetchStatus.NOT_FOUND
    assert outcome.message == "Portfolio not found"
    assert notifier.levels() == ["error"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_server_failure_is_error(notifier):
    """Test that a 500 from the service reaches the viewer as Error."""
    client = _service({"ada": (500, {"message": "Server error"})})
    fetcher = PublicDocumentFetcher(client, notifier=notifier, record_events=False)

    outcome = await fetcher.load("ada")

    assert outcome.status is FetchStatus.ERROR
    assert outcome.message == "Server error"
