"""
Styling Context

Responsibilities:
- Parses colors and derives alpha variants
- Maps customization knobs and theme to a ResolvedStyleSet

Owns: Palettes, spacing scale, layout treatments
Never: Decides which sections render
"""

from folio.contexts.styling.colors import (
    SOFT_TINT_ALPHA,
    TINT_ALPHA,
    Color,
    parse_color,
    with_alpha,
)
from folio.contexts.styling.style_computer import (
    PALETTES,
    SPACING_SCALE,
    BackgroundSurface,
    ResolvedStyleSet,
    compute_styles,
)

__all__ = [
    "Color",
    "parse_color",
    "with_alpha",
    "TINT_ALPHA",
    "SOFT_TINT_ALPHA",
    "PALETTES",
    "SPACING_SCALE",
    "BackgroundSurface",
    "ResolvedStyleSet",
    "compute_styles",
]
