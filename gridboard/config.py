"""
Shared constants for the board tessellator.

Board defaults, canvas padding, history capacity, palette and texture
catalogues. Everything that tunes generation or painting lives here so the
geometry, history and session modules agree on the same values.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


VERSION: str = "1.0.0"

# Pixels reserved on every canvas edge before cell sizing.
CANVAS_PADDING: int = 48

# Maximum number of snapshots kept by the paint history.
HISTORY_LIMIT: int = 50

# Baseline tile colour used for blank/erased cells.
DEFAULT_TILE_COLOR: str = "#ffffff"
DEFAULT_FILL: str = DEFAULT_TILE_COLOR

# Minimum interval between brush-drag hit tests.
MOVE_THROTTLE_MS: float = 16.0

# Minimum cell sizes in pixels.
MIN_HEX_SIZE: int = 8
MIN_TRIANGLE_SIZE: int = 8
MIN_SQUARE_SIZE: int = 12

# Extra rows/columns scanned around the hex outline for triangle boards.
TRIANGLE_HEX_BLEED: int = 2

TEXTURE_PREFIX: str = "texture:"

DEFAULT_BOARD_CONFIG: Dict[str, object] = {
    "grid_type": "hexagon",
    "orientation": "pointy-top",
    "board_shape": "hexagon",
    "width": 11,
    "height": 11,
    "radius": 5,
    "size": 10,
    "triangle_orientation": "point-up",
}


@dataclass(frozen=True)
class Texture:
    """Image texture that palette swatches can reference as a fill."""

    id: str
    name: str
    src: str
    fallback: Optional[str] = None


@dataclass(frozen=True)
class Swatch:
    label: str
    hex: str
    texture_id: Optional[str] = None


@dataclass(frozen=True)
class Palette:
    id: str
    name: str
    description: str
    colors: Tuple[Swatch, ...]


TEXTURES: List[Texture] = [
    Texture("stone-tiles", "Stone Tiles", "images/textures/stone-tiles.png", "#b6b7ba"),
    Texture("grass-tiles", "Grass Tiles", "images/textures/grass-tiles.png", "#7cb342"),
    Texture("rocky-terrain", "Rocky Terrain", "images/textures/rocky_terrain_02_diff_4k.jpg", "#4e4a44"),
    Texture("aerial-rocks", "Aerial Rocks", "images/textures/aerial_rocks_02_diff_4k.jpg", "#6d6a62"),
    Texture("coast-rocks", "Coast Rocks", "images/textures/coast_land_rocks_01_diff_4k.jpg", "#6b5a4a"),
    Texture("coast-sand", "Coast Sand", "images/textures/coast_sand_01_diff_4k.jpg", "#d1b88f"),
    Texture("snow-aerial", "Snow Aerial", "images/textures/snow_01_diff_4k.jpg", "#f2f4f6"),
    Texture("snow-field-color", "Snow Field (Color)", "images/textures/snow_field_aerial_col_4k.jpg", "#e7ecf4"),
    Texture("snow-field-rough", "Snow Field (Rough)", "images/textures/snow_field_aerial_rough_4k.jpg", "#dfe3ea"),
]

COLOR_PALETTES: List[Palette] = [
    Palette("landscape", "Landscape", "Classic terrain tones for natural maps.", (
        Swatch("Forest", "#2D5016"),
        Swatch("Grassland", "#7CB342"),
        Swatch("Water", "#1976D2"),
        Swatch("Mountain", "#757575"),
        Swatch("Desert", "#D4A574"),
        Swatch("Snow", "#E8EAF6"),
        Swatch("Village", "#795548"),
        Swatch("Volcanic", "#BF360C"),
    )),
    Palette("space", "Space", "Cosmic palette for sci-fi starfields and planets.", (
        Swatch("Deep Space", "#0D1B2A"),
        Swatch("Nebula", "#7B2CBF"),
        Swatch("Star", "#FFD60A"),
        Swatch("Planet", "#118AB2"),
        Swatch("Asteroid", "#495057"),
        Swatch("Ice", "#06FFA5"),
        Swatch("Energy", "#90E0EF"),
        Swatch("Void", "#240046"),
    )),
    Palette("dungeon", "Dungeon", "Underground dungeon and cave environments", (
        Swatch("Stone Floor", "#4A4A4A"),
        Swatch("Wall", "#2C2C2C"),
        Swatch("Door", "#5D4037"),
        Swatch("Trap", "#C62828"),
        Swatch("Treasure", "#FFD700"),
        Swatch("Water", "#1565C0"),
        Swatch("Lava", "#D84315"),
        Swatch("Secret", "#7B1FA2"),
    )),
    Palette("spaceship", "Spaceship", "Interior of spaceships and space stations", (
        Swatch("Corridor", "#ECEFF1"),
        Swatch("Hull", "#455A64"),
        Swatch("Control Room", "#00BCD4"),
        Swatch("Engine Room", "#FF5722"),
        Swatch("Danger Zone", "#C62828"),
        Swatch("Life Support", "#4CAF50"),
        Swatch("Storage", "#9E9E9E"),
        Swatch("Airlock", "#FFC107"),
    )),
    Palette("arctic", "Arctic", "Frozen tundra and polar environments", (
        Swatch("Snow", "#FFFFFF"),
        Swatch("Ice", "#B3E5FC"),
        Swatch("Deep Ice", "#0288D1"),
        Swatch("Frozen Water", "#01579B"),
        Swatch("Rock", "#546E7A"),
        Swatch("Cave", "#37474F"),
        Swatch("Glacier", "#BBDEFB"),
        Swatch("Fresh Snow", "#E0F7FA"),
    )),
    Palette("textures", "Textures", "Image-based fills for textured boards.", tuple(
        Swatch(texture.name, texture.fallback or DEFAULT_FILL, texture.id)
        for texture in TEXTURES
    )),
]

DEFAULT_PALETTE_ID: str = "landscape"


def get_palette_by_id(palette_id: Optional[str]) -> Optional[Palette]:
    """Return the palette with the given id, or None when unknown."""
    for palette in COLOR_PALETTES:
        if palette.id == palette_id:
            return palette
    return None


def get_all_palettes() -> List[Palette]:
    return list(COLOR_PALETTES)


def get_default_palette() -> Palette:
    """Resolve the default palette, falling back to the first entry."""
    return get_palette_by_id(DEFAULT_PALETTE_ID) or COLOR_PALETTES[0]


def get_texture_by_id(texture_id: Optional[str]) -> Optional[Texture]:
    for texture in TEXTURES:
        if texture.id == texture_id:
            return texture
    return None
