#!/usr/bin/env python3
"""
Portfolio Rendering and Export CLI

Fetches a public portfolio from the persistence service, renders it to HTML and
exports it to PDF using the rendering and export contexts.

Commands:
    render - Fetch a public portfolio and write the interactive HTML page
    export - Fetch a public portfolio and export it to PDF

Examples:\n

    portfolio.py render ada                       # Write outs/pages/ada.html

    portfolio.py render ada --out page.html       # Write to a specific file

    portfolio.py export ada                       # Write outs/exports/ada-portfolio.pdf

    portfolio.py export ada --out-dir /tmp/pdfs   # Export to a specific directory
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.export import ExportJob, ExportState, PdfDocumentWriter
from folio.contexts.export.logger import setup_export_logger
from folio.contexts.rendering import render_interactive_html, render_view
from folio.contexts.retrieval import (
    FetchStatus,
    FileCredentialStore,
    PortfolioApiClient,
    PublicDocumentFetcher,
)
from folio.utils.logger import session_log_dir, setup_logger

load_dotenv()
PAGES_PATH = Path(os.getenv("FOLIO_PAGES_PATH", "outs/pages"))


app = typer.Typer(
    help="Render public portfolios to HTML and export them to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fetch(identifier: str):
    """Fetch and classify; exits with code 1 on NotFound or Error."""
    fetcher = PublicDocumentFetcher(PortfolioApiClient(credentials=FileCredentialStore()))
    outcome = asyncio.run(fetcher.load(identifier))

    if outcome.status is not FetchStatus.SUCCESS:
        label = "Not found" if outcome.status is FetchStatus.NOT_FOUND else "Error"
        typer.secho(f"✗ {label}: {outcome.message}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    return outcome


@app.command("render")
def render_command(
    identifier: Annotated[
        str,
        typer.Argument(help="Public identifier (username) of the portfolio owner"),
    ],
    out: Annotated[
        Optional[Path],
        typer.Option(
            "--out",
            "-o",
            help="Output HTML file (default: outs/pages/<identifier>.html)",
        ),
    ] = None,
):
    """
    Fetch a public portfolio and write its interactive HTML page.

    Examples:\n

        $ portfolio.py render ada                      # Render to the default location

        $ portfolio.py render ada --out page.html      # Render to page.html
    """
    typer.secho(f"\nRendering: {identifier}", fg=typer.colors.BLUE, bold=True)
    setup_logger("render", session_log_dir("render"), extra_provenance={"Identifier": identifier})

    outcome = _fetch(identifier)
    view = render_view(outcome.document, outcome.projects, identifier=identifier)
    html = render_interactive_html(view.tree, view.styles, title=view.document.hero.title)

    out = out or PAGES_PATH / f"{identifier}.html"
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(html, encoding="utf-8")

    typer.secho("✓ Render succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Projects: {len(view.projects)}")
    typer.echo(f"  Sections: {', '.join(view.decisions.order)}")
    typer.echo(f"  HTML: {out}\n")


@app.command("export")
def export_command(
    identifier: Annotated[
        str,
        typer.Argument(help="Public identifier (username) of the portfolio owner"),
    ],
    out_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--out-dir",
            "-d",
            help="Directory for the PDF (default: FOLIO_EXPORTS_PATH)",
        ),
    ] = None,
):
    """
    Fetch a public portfolio and export it to PDF.

    The PDF is laid out from the same tree the interactive page renders.

    Examples:\n

        $ portfolio.py export ada                      # Export to the default location

        $ portfolio.py export ada --out-dir /tmp/pdfs  # Export to /tmp/pdfs
    """
    typer.secho(f"\nExporting: {identifier}", fg=typer.colors.BLUE, bold=True)
    setup_export_logger(session_log_dir("export"))

    outcome = _fetch(identifier)
    view = render_view(outcome.document, outcome.projects, identifier=identifier)

    job = ExportJob(identifier, writer=PdfDocumentWriter(output_dir=out_dir))
    asyncio.run(job.start(view.tree))

    if job.state is ExportState.SUCCEEDED:
        typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  PDF: {job.result.artifact_path}")
        typer.echo(f"  Elapsed: {job.result.elapsed_s:.2f}s\n")
        raise typer.Exit(code=0)

    typer.secho(f"✗ Export failed: {job.result.error}\n", fg=typer.colors.RED, bold=True)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
