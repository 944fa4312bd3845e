from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

from hexmapper.content.codes import HILL_TERRAIN_CODES, MOUNTAIN_TERRAIN_CODES, WATER_TERRAIN_CODES
from hexmapper.mapping.coords import Direction
from hexmapper.mapping.render import RenderHex, RenderMap

logger = logging.getLogger(__name__)

HEX_SIZE = 18
IMAGE_MARGIN = 12
BACKGROUND_COLOR = (24, 26, 36)
OUTLINE_COLOR = (35, 35, 40)
UNKNOWN_TERRAIN_COLOR = (90, 90, 96)

TERRAIN_COLORS: dict[str, tuple[int, int, int]] = {
    "water": (52, 101, 164),
    "mountain": (120, 110, 104),
    "hill": (153, 126, 90),
    "forest": (61, 120, 72),
    "desert": (222, 196, 132),
    "swamp": (84, 110, 82),
    "flat": (132, 168, 94),
}
EDGE_COLORS: dict[str, tuple[int, int, int]] = {
    "Canal": (80, 200, 230),
    "Ford": (190, 220, 255),
    "Pass": (230, 230, 230),
    "River": (40, 90, 220),
    "Stone Road": (70, 60, 50),
}
SETTLEMENT_COLOR = (80, 160, 255)
SPECIAL_COLOR = (255, 243, 130)
FRIENDLY_COLOR = (140, 225, 255)
HOSTILE_COLOR = (210, 85, 85)

# Corner indices bounding each edge of a flat-topped hex, corners counted clockwise from east.
EDGE_CORNERS: dict[Direction, tuple[int, int]] = {
    Direction.N: (4, 5),
    Direction.NE: (5, 0),
    Direction.SE: (0, 1),
    Direction.S: (1, 2),
    Direction.SW: (2, 3),
    Direction.NW: (3, 4),
}

pygame: Any | None = None


def _ensure_pygame_imported() -> Any:
    global pygame
    if pygame is None:
        import pygame as pygame_module

        pygame = pygame_module
    return pygame


def terrain_color(render_hex: RenderHex) -> tuple[int, int, int]:
    if not render_hex.terrain:
        return UNKNOWN_TERRAIN_COLOR
    if render_hex.terrain in WATER_TERRAIN_CODES:
        return TERRAIN_COLORS["water"]
    if render_hex.terrain in MOUNTAIN_TERRAIN_CODES:
        return TERRAIN_COLORS["mountain"]
    if render_hex.terrain in HILL_TERRAIN_CODES:
        return TERRAIN_COLORS["hill"]
    name = render_hex.terrain_name
    if "Forest" in name:
        return TERRAIN_COLORS["forest"]
    if "Desert" in name:
        return TERRAIN_COLORS["desert"]
    if "Swamp" in name or "Wetlands" in name:
        return TERRAIN_COLORS["swamp"]
    return TERRAIN_COLORS["flat"]


def hex_center(column: int, row: int) -> tuple[float, float]:
    x = IMAGE_MARGIN + HEX_SIZE + column * HEX_SIZE * 1.5
    y = IMAGE_MARGIN + HEX_SIZE * math.sqrt(3) * (row + 0.5 + 0.5 * (column & 1))
    return (x, y)


def hex_corners(center: tuple[float, float]) -> list[tuple[float, float]]:
    points: list[tuple[float, float]] = []
    for i in range(6):
        angle = math.radians(60 * i)
        points.append((center[0] + HEX_SIZE * math.cos(angle), center[1] + HEX_SIZE * math.sin(angle)))
    return points


def image_size(render_map: RenderMap) -> tuple[int, int]:
    max_column = max(render_hex.render_at.column for render_hex in render_map.hexes)
    max_row = max(render_hex.render_at.row for render_hex in render_map.hexes)
    width = IMAGE_MARGIN * 2 + HEX_SIZE * 2 + math.ceil(max_column * HEX_SIZE * 1.5)
    height = IMAGE_MARGIN * 2 + math.ceil(HEX_SIZE * math.sqrt(3) * (max_row + 1.5))
    return (width, height)


def _draw_hex(surface: Any, render_hex: RenderHex) -> None:
    center = hex_center(render_hex.render_at.column, render_hex.render_at.row)
    corners = hex_corners(center)
    pygame.draw.polygon(surface, terrain_color(render_hex), corners)
    pygame.draw.polygon(surface, OUTLINE_COLOR, corners, 1)

    for feature, directions in render_hex.edges.items():
        color = EDGE_COLORS.get(feature, OUTLINE_COLOR)
        for direction in directions:
            start, end = EDGE_CORNERS[direction]
            pygame.draw.line(surface, color, corners[start], corners[end], 3)

    x, y = int(center[0]), int(center[1])
    if render_hex.specials:
        pygame.draw.circle(surface, SPECIAL_COLOR, (x, y), 6)
        pygame.draw.circle(surface, OUTLINE_COLOR, (x, y), 6, 1)
    elif render_hex.settlements:
        pygame.draw.circle(surface, SETTLEMENT_COLOR, (x, y), 5)
        pygame.draw.circle(surface, OUTLINE_COLOR, (x, y), 5, 1)

    for index, encounter in enumerate(render_hex.encounters[:3]):
        color = FRIENDLY_COLOR if encounter.friendly else HOSTILE_COLOR
        pygame.draw.circle(surface, color, (x - 6 + index * 6, y + 9), 2)


def render_preview_png(render_map: RenderMap, path: str | Path) -> tuple[int, int]:
    """Draw the render map onto an off-screen surface and save it as a PNG."""
    if not render_map.hexes:
        raise ValueError("no hexes to preview")
    _ensure_pygame_imported()

    size = image_size(render_map)
    surface = pygame.Surface(size)
    surface.fill(BACKGROUND_COLOR)
    for render_hex in render_map.hexes:
        _draw_hex(surface, render_hex)
    pygame.image.save(surface, str(path))
    logger.info("wrote preview path=%s size=%dx%d", path, size[0], size[1])
    return size
