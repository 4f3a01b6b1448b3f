"""
Render Pipeline

Orchestrates one render pass: resolve -> (style, compose) -> render.
Every pass recomputes styles and decisions; nothing is cached between passes.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from folio.contexts.rendering.engine import RenderNode, render_page
from folio.contexts.rendering.logger import log_render_summary
from folio.contexts.rendering.section_composer import SectionDecisions, compose_sections
from folio.contexts.resolution import PortfolioDocument, Project, resolve_document, resolve_projects
from folio.contexts.styling import ResolvedStyleSet, compute_styles


@dataclass(frozen=True)
class RenderedView:
    """
    Everything one render pass produced.

    Attributes:
        identifier: Public identifier of the document owner
        document: Resolved document
        projects: Resolved projects
        styles: Computed style set
        decisions: Section decisions
        tree: Renderable tree (shared by the interactive page and exports)
    """

    identifier: Optional[str]
    document: PortfolioDocument
    projects: Tuple[Project, ...]
    styles: ResolvedStyleSet
    decisions: SectionDecisions
    tree: RenderNode


def render_view(raw_document: Any, raw_projects: Any = (), identifier: Optional[str] = None) -> RenderedView:
    """
    Run one full render pass.

    Args:
        raw_document: Raw document mapping or resolved PortfolioDocument
        raw_projects: Raw project mappings or resolved Projects
        identifier: Public identifier of the owner (used for logging and exports)

    Returns:
        RenderedView
    """
    document = resolve_document(raw_document)
    projects = resolve_projects(raw_projects)
    styles = compute_styles(document)
    decisions = compose_sections(document, projects)
    tree = render_page(document, styles, decisions, projects)

    log_render_summary(identifier or "<anonymous>", tree)

    return RenderedView(
        identifier=identifier,
        document=document,
        projects=projects,
        styles=styles,
        decisions=decisions,
        tree=tree,
    )
