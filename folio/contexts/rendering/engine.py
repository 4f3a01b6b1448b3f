"""
Render Engine

Pure composition of resolved data, computed styles and section decisions into a
renderable tree. No I/O and no state: identical inputs always yield an equal tree.

The same tree serves the interactive page and the export snapshot, which is what
keeps the exported document visually identical to what the visitor sees.
"""

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Sequence, Tuple

from folio.contexts.rendering.section_composer import TWO_COLUMN, SectionDecisions
from folio.contexts.resolution.document import PortfolioDocument, Project
from folio.contexts.styling.style_computer import HERO_OVERLAY_ALPHA, ResolvedStyleSet

PROJECTS_HEADING = "Projects"
CONTACT_HEADING = "Get in Touch"
GITHUB_LINK_TEXT = "View on GitHub"
LIVE_LINK_TEXT = "Live Demo"

HERO_TEXT_COLOR = "#FFFFFF"


@dataclass(frozen=True)
class RenderNode:
    """
    One node of the renderable tree.

    Attributes:
        kind: Node kind (page, section, heading, paragraph, button, link, image,
            grid, column, card, chip_list, chip, contact_row, location, overlay)
        text: Text content, if any
        style: CSS declarations as ordered (property, value) pairs
        attrs: Other attributes as ordered (name, value) pairs
        children: Child nodes in order
    """

    kind: str
    text: Optional[str] = None
    style: Tuple[Tuple[str, str], ...] = ()
    attrs: Tuple[Tuple[str, object], ...] = ()
    children: Tuple["RenderNode", ...] = ()

    def attr(self, name: str, default=None):
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    def style_dict(self) -> dict:
        return dict(self.style)

    def walk(self) -> Iterator["RenderNode"]:
        """Depth-first, pre-order traversal including this node."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, kind: str) -> Tuple["RenderNode", ...]:
        return tuple(node for node in self.walk() if node.kind == kind)

    def section(self, section_id: str) -> Optional["RenderNode"]:
        for node in self.find_all("section"):
            if node.attr("id") == section_id:
                return node
        return None

    def count(self) -> int:
        return sum(1 for _ in self.walk())


def _node(
    kind: str,
    *children: RenderNode,
    text: Optional[str] = None,
    style: Optional[Mapping[str, str]] = None,
    **attrs,
) -> RenderNode:
    """Build a RenderNode, dropping attributes whose value is None."""
    return RenderNode(
        kind=kind,
        text=text,
        style=tuple((style or {}).items()),
        attrs=tuple((k, v) for k, v in attrs.items() if v is not None),
        children=tuple(children),
    )


def _heading(text: str, styles: ResolvedStyleSet, level: int = 2) -> RenderNode:
    return _node(
        "heading",
        text=text,
        level=level,
        style={
            "color": styles.primary_color.to_hex(),
            "text-align": styles.treatment.heading_align,
        },
    )


def _chips(labels: Sequence[str], styles: ResolvedStyleSet) -> RenderNode:
    chip_style = {
        "background-color": styles.background_tint.to_hex(),
        "color": styles.primary_color.to_hex(),
    }
    return _node("chip_list", *(_node("chip", text=label, style=chip_style) for label in labels))


def _section_style(styles: ResolvedStyleSet, **extra: str) -> dict:
    padding = f"{styles.section_padding}px"
    return {"padding-top": padding, "padding-bottom": padding, **extra}


def render_hero(document: PortfolioDocument, styles: ResolvedStyleSet) -> RenderNode:
    hero = document.hero
    surface = styles.background_surface

    if surface.is_image:
        background = {
            "background-image": f"url('{surface.image_url}')",
            "background-size": "cover",
            "background-position": "center",
        }
    else:
        background = {"background-color": surface.color.to_hex()}

    children = [_node("overlay", style={"background-color": f"rgba(0, 0, 0, {HERO_OVERLAY_ALPHA})"})]
    children.extend(
        [
            _node("heading", text=hero.title, level=1, style={"color": HERO_TEXT_COLOR}),
            _node("paragraph", text=hero.subtitle, style={"color": HERO_TEXT_COLOR}),
            _node(
                "button",
                text=hero.cta_text,
                href=hero.cta_link,
                style={
                    "background-color": styles.primary_color.to_hex(),
                    "color": HERO_TEXT_COLOR,
                },
            ),
        ]
    )
    return _node(
        "section",
        *children,
        id="hero",
        background_image=surface.image_url,
        style=_section_style(styles, **background),
    )


def render_about(
    document: PortfolioDocument, styles: ResolvedStyleSet, decisions: SectionDecisions
) -> RenderNode:
    about = document.about
    text_column = _node(
        "column",
        _node("paragraph", text=about.bio, style={"color": styles.palette.muted_text.to_hex()}),
        _chips(about.skills, styles),
        span="full" if decisions.about_layout != TWO_COLUMN else None,
    )

    if decisions.about_layout == TWO_COLUMN:
        grid = _node(
            "grid",
            _node("column", _node("image", src=about.image, alt="Profile")),
            text_column,
            columns=2,
            layout=decisions.about_layout,
        )
    else:
        grid = _node("grid", text_column, columns=1, layout=decisions.about_layout)

    return _node("section", _heading(about.title, styles), grid, id="about", style=_section_style(styles))


def render_project_card(project: Project, styles: ResolvedStyleSet) -> RenderNode:
    link_style = {"color": styles.primary_color.to_hex()}
    links = []
    if project.github_url is not None:
        links.append(_node("link", text=GITHUB_LINK_TEXT, href=project.github_url, external=True, style=link_style))
    if project.live_url is not None:
        links.append(_node("link", text=LIVE_LINK_TEXT, href=project.live_url, external=True, style=link_style))

    return _node(
        "card",
        _node("heading", text=project.title, level=3),
        _node("paragraph", text=project.description, style={"color": styles.palette.muted_text.to_hex()}),
        _chips(project.technologies, styles),
        _node("link_list", *links),
        key=project.project_id,
        style={
            "background-color": styles.palette.card.to_hex(),
            "border-radius": f"{styles.treatment.card_radius}px",
        },
    )


def render_projects(projects: Sequence[Project], styles: ResolvedStyleSet) -> RenderNode:
    grid = _node("grid", *(render_project_card(p, styles) for p in projects), columns=3)
    return _node(
        "section",
        _heading(PROJECTS_HEADING, styles),
        grid,
        id="projects",
        style=_section_style(styles, **{"background-color": styles.palette.surface.to_hex()}),
    )


def render_contact(styles: ResolvedStyleSet, decisions: SectionDecisions) -> RenderNode:
    children = [_heading(CONTACT_HEADING, styles)]

    row_style = {
        "background-color": styles.soft_tint.to_hex(),
        "color": styles.primary_color.to_hex(),
    }
    rows = [
        _node(
            "contact_row",
            text=method.label,
            href=method.href,
            method=method.kind,
            external=method.external or None,
            style=row_style,
        )
        for method in decisions.link_methods
    ]
    if rows:
        children.append(_node("grid", *rows, columns=2))

    location = decisions.location
    if location is not None:
        children.append(
            _node("location", text=location.label, style={"color": styles.primary_color.to_hex()})
        )

    return _node("section", *children, id="contact", style=_section_style(styles))


def render_page(
    document: PortfolioDocument,
    styles: ResolvedStyleSet,
    decisions: SectionDecisions,
    projects: Sequence[Project] = (),
) -> RenderNode:
    """
    Compose the renderable tree for a resolved document.

    Args:
        document: Resolved PortfolioDocument
        styles: Style set computed from the same document
        decisions: Section decisions composed from the same document and projects
        projects: Resolved projects for the grid

    Returns:
        Root "page" RenderNode with one section child per entry of decisions.order
    """
    renderers = {
        "hero": lambda: render_hero(document, styles),
        "about": lambda: render_about(document, styles, decisions),
        "projects": lambda: render_projects(projects, styles),
        "contact": lambda: render_contact(styles, decisions),
    }

    return _node(
        "page",
        *(renderers[name]() for name in decisions.order),
        theme=styles.theme,
        layout=styles.layout,
        style={
            "font-family": styles.font_family,
            "background-color": styles.palette.page_background.to_hex(),
            "color": styles.palette.text.to_hex(),
            "--primary": styles.primary_color.to_hex(),
            "--secondary": styles.secondary_color.to_hex(),
        },
    )
