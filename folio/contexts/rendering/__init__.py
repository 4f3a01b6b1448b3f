"""
Rendering Context

Responsibilities:
- Decides which sections and sub-elements render, and in which layout variant
- Composes resolved data, styles and decisions into a renderable tree
- Serializes the tree to interactive or export HTML

Owns: Section order, RenderNode tree, HTML templates
Never: Fetches documents or writes export artifacts
"""

from folio.contexts.rendering.engine import RenderNode, render_page
from folio.contexts.rendering.html import (
    TemplateRegistry,
    render_export_html,
    render_interactive_html,
)
from folio.contexts.rendering.pipeline import RenderedView, render_view
from folio.contexts.rendering.section_composer import (
    SECTION_ORDER,
    SINGLE_COLUMN,
    TWO_COLUMN,
    ContactMethod,
    SectionDecisions,
    compose_sections,
)

__all__ = [
    # Section composition
    "compose_sections",
    "SectionDecisions",
    "ContactMethod",
    "SECTION_ORDER",
    "TWO_COLUMN",
    "SINGLE_COLUMN",
    # Render tree
    "RenderNode",
    "render_page",
    "render_view",
    "RenderedView",
    # HTML
    "TemplateRegistry",
    "render_interactive_html",
    "render_export_html",
]
