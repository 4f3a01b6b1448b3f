"""
Structured colors.

Colors are parsed once into RGBA components so that alpha variants are produced by
arithmetic on a typed value rather than by string concatenation.

The tinted-surface alpha (TINT_ALPHA) is a flat opacity applied to the primary color,
not a perceptual blend with the page background. Tints therefore shift slightly
between light and dark themes; that approximation is accepted.
"""

import re
from dataclasses import dataclass

HEX_COLOR_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

# 0x20 / 0xFF ~ 12.5% opacity, chip and badge surfaces
TINT_ALPHA = 0x20 / 0xFF
# 0x10 / 0xFF ~ 6.3% opacity, contact rows
SOFT_TINT_ALPHA = 0x10 / 0xFF


@dataclass(frozen=True)
class Color:
    """
    sRGB color with alpha.

    Attributes:
        red: 0-255
        green: 0-255
        blue: 0-255
        alpha: 0.0-1.0
    """

    red: int
    green: int
    blue: int
    alpha: float = 1.0

    def to_hex(self) -> str:
        """Uppercase #RRGGBB, or #RRGGBBAA when not fully opaque."""
        rgb = f"#{self.red:02X}{self.green:02X}{self.blue:02X}"
        if self.alpha >= 1.0:
            return rgb
        return f"{rgb}{round(self.alpha * 255):02X}"

    def to_rgb_fractions(self) -> tuple:
        """(r, g, b) as 0.0-1.0 fractions."""
        return (self.red / 255, self.green / 255, self.blue / 255)

    def __str__(self) -> str:
        return self.to_hex()


def parse_color(value: str) -> Color:
    """
    Parse a hex color string.

    Accepts #RGB, #RGBA, #RRGGBB and #RRGGBBAA, with or without the leading '#'.

    Args:
        value: Hex color string

    Returns:
        Color

    Raises:
        ValueError: If value is not a hex color
    """
    match = HEX_COLOR_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Not a hex color: {value!r}")

    digits = match.group(1)
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)

    red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return Color(red, green, blue, alpha)


def with_alpha(color: Color, fraction: float = TINT_ALPHA) -> Color:
    """
    Return the same color at the given opacity.

    Args:
        color: Base color
        fraction: Opacity in [0, 1] (default: TINT_ALPHA, ~12% opacity)

    Returns:
        New Color; the base color's own alpha is replaced, not multiplied

    Raises:
        ValueError: If fraction is outside [0, 1]
    """
    if not 0.0 <= fraction <= 1.0:
        raise ValueError(f"Alpha fraction must be within [0, 1], got: {fraction}")
    return Color(color.red, color.green, color.blue, fraction)
