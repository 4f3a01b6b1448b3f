"""
HTML Rendering

Serializes a RenderNode tree to HTML with Jinja2 templates. The interactive page
wraps the tree with the download toolbar; the export page is the bare tree.
"""

from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from folio.contexts.rendering.engine import RenderNode
from folio.contexts.styling.style_computer import ResolvedStyleSet

TEMPLATES_PATH = Path(__file__).parent / "templates"

INTERACTIVE_TEMPLATE = "interactive.html.jinja"
EXPORT_TEMPLATE = "export.html.jinja"

DOWNLOAD_LABEL = "Download Portfolio"


def css(style) -> str:
    """Jinja filter: (property, value) pairs -> inline CSS declarations."""
    return "; ".join(f"{prop}: {value}" for prop, value in style)


class TemplateRegistry:
    """
    Registry for loading and caching the page templates.

    Templates live in folio/contexts/rendering/templates/ and are autoescaped;
    undefined variables raise instead of rendering as empty strings.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Template directory. Defaults to the packaged templates
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = templates_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["css"] = css

    def get_template(self, name: str) -> Template:
        """
        Get a template by file name, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If template file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        try:
            template = self.env.get_template(name)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found in {self.templates_path}"
            ) from e

        self._cache[name] = template
        return template

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        return name in self._cache


_default_registry: Optional[TemplateRegistry] = None


def _registry() -> TemplateRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = TemplateRegistry()
    return _default_registry


def render_interactive_html(
    tree: RenderNode,
    styles: ResolvedStyleSet,
    title: str,
    download_href: str = "#download",
    registry: TemplateRegistry = None,
) -> str:
    """
    Render the interactive page: download toolbar plus the document tree.

    Args:
        tree: Root page node from render_page()
        styles: Style set the tree was rendered with (toolbar button color)
        title: Browser title
        download_href: Target of the download button
        registry: Template registry (default: shared packaged registry)

    Returns:
        Complete HTML document
    """
    template = (registry or _registry()).get_template(INTERACTIVE_TEMPLATE)
    return template.render(
        tree=tree,
        title=title,
        download_href=download_href,
        download_label=DOWNLOAD_LABEL,
        button_color=styles.primary_color.to_hex(),
    )


def render_export_html(tree: RenderNode, title: str, registry: TemplateRegistry = None) -> str:
    """Render the bare document tree (no interactive chrome) for offline viewing."""
    template = (registry or _registry()).get_template(EXPORT_TEMPLATE)
    return template.render(tree=tree, title=title)
