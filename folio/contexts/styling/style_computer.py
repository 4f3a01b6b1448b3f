"""
Style Computation

Maps a resolved document's customization knobs and theme to the concrete visual
parameters the renderer consumes. Stateless and total: every resolved document
yields a style set, with unknown knob values falling back to defaults.
"""

from dataclasses import dataclass
from typing import Optional

from folio.contexts.resolution.defaults import DEFAULT_CUSTOMIZATION
from folio.contexts.resolution.document import PortfolioDocument
from folio.contexts.styling.colors import (
    SOFT_TINT_ALPHA,
    TINT_ALPHA,
    Color,
    parse_color,
    with_alpha,
)
from folio.contexts.styling.logger import _log_debug, _log_warning

# Vertical section padding in CSS pixels (py-20, py-12, py-32)
SPACING_SCALE = {
    "comfortable": 80,
    "compact": 48,
    "spacious": 128,
}
DEFAULT_SPACING = "comfortable"

IMAGE = "image"
SOLID_COLOR = "color"


@dataclass(frozen=True)
class Palette:
    """
    Text and surface colors for one theme. Switched wholesale, never mixed.

    Attributes:
        page_background: Page body background
        text: Primary body text
        muted_text: Secondary body text (bio, project descriptions)
        surface: Alternate section background and hero fallback
        card: Project card background
    """

    page_background: Color
    text: Color
    muted_text: Color
    surface: Color
    card: Color


PALETTES = {
    "light": Palette(
        page_background=parse_color("#FFFFFF"),
        text=parse_color("#000000"),
        muted_text=parse_color("#4B5563"),
        surface=parse_color("#F3F4F6"),
        card=parse_color("#FFFFFF"),
    ),
    "dark": Palette(
        page_background=parse_color("#1A1A1A"),
        text=parse_color("#FFFFFF"),
        muted_text=parse_color("#D1D5DB"),
        surface=parse_color("#2D2D2D"),
        card=parse_color("#1A1A1A"),
    ),
}


@dataclass(frozen=True)
class LayoutTreatment:
    """Visual treatment selected by customization.layout. Never changes section order."""

    heading_align: str
    card_radius: int


LAYOUT_TREATMENTS = {
    "modern": LayoutTreatment(heading_align="center", card_radius=8),
    "classic": LayoutTreatment(heading_align="left", card_radius=4),
    "minimal": LayoutTreatment(heading_align="left", card_radius=0),
}
DEFAULT_LAYOUT = "modern"

# Black overlay over the hero background, every layout; keeps white hero text legible
HERO_OVERLAY_ALPHA = 0.5


@dataclass(frozen=True)
class BackgroundSurface:
    """
    Hero background choice.

    Attributes:
        kind: IMAGE or SOLID_COLOR
        image_url: Cover-fit image URL (IMAGE only)
        color: Solid color (SOLID_COLOR only)
    """

    kind: str
    image_url: Optional[str] = None
    color: Optional[Color] = None

    @property
    def is_image(self) -> bool:
        return self.kind == IMAGE


@dataclass(frozen=True)
class ResolvedStyleSet:
    """
    Concrete visual parameters for one render pass. Recomputed every render.

    Attributes:
        theme: Effective theme ("light" or "dark")
        primary_color: Accent color
        secondary_color: Secondary accent
        background_tint: Primary at TINT_ALPHA, for chips and badges
        soft_tint: Primary at SOFT_TINT_ALPHA, for contact rows
        spacing: Effective spacing name
        section_padding: Vertical section padding in pixels
        font_family: Page font family
        background_surface: Hero background
        palette: Theme palette
        layout: Effective layout name
        treatment: Layout treatment
    """

    theme: str
    primary_color: Color
    secondary_color: Color
    background_tint: Color
    soft_tint: Color
    spacing: str
    section_padding: int
    font_family: str
    background_surface: BackgroundSurface
    palette: Palette
    layout: str
    treatment: LayoutTreatment


def _color_or_default(value: str, field_key: str) -> Color:
    try:
        return parse_color(value)
    except ValueError:
        fallback = DEFAULT_CUSTOMIZATION[field_key]
        _log_warning(f"Unparseable {field_key} {value!r}, using {fallback}")
        return parse_color(fallback)


def spacing_padding(spacing: Optional[str]) -> int:
    """Section padding for a spacing name; unknown or absent -> comfortable."""
    return SPACING_SCALE.get(spacing, SPACING_SCALE[DEFAULT_SPACING])


def select_background_surface(document: PortfolioDocument, palette: Palette) -> BackgroundSurface:
    """
    Choose the hero background.

    Precedence: hero image (cover-fit), then the author's hero color, then the
    theme's neutral surface.
    """
    hero = document.hero
    if hero.background_image is not None:
        return BackgroundSurface(kind=IMAGE, image_url=hero.background_image)

    if hero.background_color is not None:
        try:
            return BackgroundSurface(kind=SOLID_COLOR, color=parse_color(hero.background_color))
        except ValueError:
            _log_warning(
                f"Unparseable hero background color {hero.background_color!r}, using theme surface"
            )

    return BackgroundSurface(kind=SOLID_COLOR, color=palette.surface)


def compute_styles(document: PortfolioDocument) -> ResolvedStyleSet:
    """
    Compute the style set for a resolved document.

    Args:
        document: Resolved PortfolioDocument

    Returns:
        ResolvedStyleSet
    """
    custom = document.customization

    theme = document.theme
    if theme not in PALETTES:
        _log_warning(f"Unknown theme {theme!r}, using light")
        theme = "light"
    palette = PALETTES[theme]

    spacing = custom.spacing
    if spacing not in SPACING_SCALE:
        _log_warning(f"Unknown spacing {spacing!r}, using {DEFAULT_SPACING}")
        spacing = DEFAULT_SPACING

    layout = custom.layout
    if layout not in LAYOUT_TREATMENTS:
        _log_warning(f"Unknown layout {layout!r}, using {DEFAULT_LAYOUT}")
        layout = DEFAULT_LAYOUT

    primary = _color_or_default(custom.primary_color, "primaryColor")
    secondary = _color_or_default(custom.secondary_color, "secondaryColor")

    surface = select_background_surface(document, palette)

    _log_debug(f"Styles: theme={theme} layout={layout} spacing={spacing} surface={surface.kind}")

    return ResolvedStyleSet(
        theme=theme,
        primary_color=primary,
        secondary_color=secondary,
        background_tint=with_alpha(primary, TINT_ALPHA),
        soft_tint=with_alpha(primary, SOFT_TINT_ALPHA),
        spacing=spacing,
        section_padding=spacing_padding(spacing),
        font_family=custom.font_family,
        background_surface=surface,
        palette=palette,
        layout=layout,
        treatment=LAYOUT_TREATMENTS[layout],
    )
