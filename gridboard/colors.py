"""
Colour value parsing.

Paint colours are opaque strings to the geometry core. This module turns
user-supplied specifications (CSS names, hex codes, ``r,g,b`` tuples) into
canonical ``#rrggbb`` strings and recognises ``texture:<id>`` references,
which pass through untouched.
"""

from typing import Tuple

from PIL import ImageColor

from gridboard.config import TEXTURE_PREFIX, Swatch


def is_texture_ref(value: str) -> bool:
    return isinstance(value, str) and value.startswith(TEXTURE_PREFIX)


def texture_ref(texture_id: str) -> str:
    return f"{TEXTURE_PREFIX}{texture_id}"


def swatch_fill_value(swatch: Swatch) -> str:
    """Fill value for a palette swatch: texture reference or its hex colour."""
    if swatch.texture_id:
        return texture_ref(swatch.texture_id)
    return swatch.hex


class ColorParser:
    """Parses color specifications from multiple string formats.

    Supports CSS named colours, hex codes (#RGB, #RRGGBB), and RGB
    comma-separated tuples (e.g. '255,128,0').
    """

    def parse(self, color_str: str) -> Tuple[int, int, int]:
        """Parse a color string into an (R, G, B) tuple.

        Args:
            color_str: The color specification string.

        Returns:
            An (R, G, B) tuple of integers in [0, 255].

        Raises:
            ValueError: If the color string cannot be parsed.
        """
        if not isinstance(color_str, str):
            raise ValueError(f"Invalid color specification: {color_str!r}")
        s = color_str.strip()

        if "," in s:
            return self._parse_rgb_tuple(s)

        try:
            rgb = ImageColor.getrgb(s)
        except (ValueError, AttributeError):
            raise ValueError(f"Invalid color specification: '{color_str}'")
        return (rgb[0], rgb[1], rgb[2])

    def normalize(self, color_str: str) -> str:
        """Canonicalise a paint value.

        Texture references are returned unchanged; anything else is parsed and
        rendered as a lowercase ``#rrggbb`` string.

        Raises:
            ValueError: If the value is neither a texture reference nor a
                parseable colour.
        """
        if is_texture_ref(color_str):
            return color_str
        r, g, b = self.parse(color_str)
        return f"#{r:02x}{g:02x}{b:02x}"

    def _parse_rgb_tuple(self, s: str) -> Tuple[int, int, int]:
        """Parse a comma-separated RGB string like '255,128,0'.

        Raises:
            ValueError: If parsing fails or values are out of range.
        """
        parts = [p.strip() for p in s.split(",")]
        if len(parts) != 3:
            raise ValueError(f"RGB tuple must have 3 components, got {len(parts)}: '{s}'")
        try:
            values = tuple(int(p) for p in parts)
        except ValueError:
            raise ValueError(f"RGB components must be integers: '{s}'")
        for v in values:
            if v < 0 or v > 255:
                raise ValueError(f"RGB values must be in [0, 255], got {v}: '{s}'")
        return (values[0], values[1], values[2])
