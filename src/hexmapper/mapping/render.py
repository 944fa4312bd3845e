from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from hexmapper.content.codes import EDGE_FEATURE_CODES, RESOURCE_CODES, TERRAIN_TILE_NAMES
from hexmapper.mapping.bounds import MapBounds
from hexmapper.mapping.coords import Direction, MapCoord
from hexmapper.mapping.merge import DIRECTION_ORDER, TileState
from hexmapper.mapping.model import unit_in_clan

logger = logging.getLogger(__name__)


class RenderError(ValueError):
    """Raised when a merged tile holds a code the renderer does not know."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = tuple(errors)
        super().__init__("; ".join(self.errors))


@dataclass(frozen=True)
class RenderEncounter:
    unit: str
    friendly: bool

    def to_dict(self) -> dict[str, Any]:
        return {"unit": self.unit, "friendly": self.friendly}


@dataclass(frozen=True)
class RenderHex:
    location: MapCoord
    render_at: MapCoord
    terrain: str = ""
    terrain_name: str = ""
    was_visited: bool = False
    was_scouted: bool = False
    edges: dict[str, tuple[Direction, ...]] = field(default_factory=dict)
    resources: tuple[str, ...] = ()
    settlements: tuple[str, ...] = ()
    specials: tuple[str, ...] = ()
    encounters: tuple[RenderEncounter, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "location": self.location.to_grid(),
            "renderAt": {"column": self.render_at.column, "row": self.render_at.row},
            "terrain": self.terrain,
            "terrainName": self.terrain_name,
            "wasVisited": self.was_visited,
            "wasScouted": self.was_scouted,
            "edges": {
                feature: [direction.value for direction in directions]
                for feature, directions in self.edges.items()
            },
            "resources": list(self.resources),
            "settlements": list(self.settlements),
            "specials": list(self.specials),
            "encounters": [encounter.to_dict() for encounter in self.encounters],
        }


@dataclass(frozen=True)
class RenderMap:
    turn: str
    bounds: MapBounds
    hexes: tuple[RenderHex, ...]

    @property
    def upper_left(self) -> MapCoord:
        return self.bounds.upper_left

    @property
    def lower_right(self) -> MapCoord:
        return self.bounds.lower_right

    @property
    def offset(self) -> MapCoord:
        return self.bounds.offset

    def to_dict(self) -> dict[str, Any]:
        return {
            "turn": self.turn,
            **self.bounds.to_dict(),
            "hexes": [render_hex.to_dict() for render_hex in self.hexes],
        }


def build_render_hex(tile: TileState, offset: MapCoord, owning_clan: str) -> RenderHex:
    label = tile.location.to_grid()
    errors: list[str] = []

    terrain_name = ""
    if tile.terrain:
        terrain_name = TERRAIN_TILE_NAMES.get(tile.terrain, "")
        if not terrain_name:
            errors.append(f"tile {label}: unknown terrain {tile.terrain!r}")

    edges_by_feature: dict[str, list[Direction]] = {}
    for direction in DIRECTION_ORDER:
        edge = tile.edges.get(direction)
        if edge is None or not edge.feature:
            continue
        if edge.feature not in EDGE_FEATURE_CODES:
            errors.append(f"tile {label}: unknown edge feature {edge.feature!r}")
            continue
        edges_by_feature.setdefault(edge.feature, []).append(direction)

    for resource in tile.resources:
        if resource not in RESOURCE_CODES:
            errors.append(f"tile {label}: unknown resource {resource!r}")

    if errors:
        raise RenderError(errors)

    return RenderHex(
        location=tile.location,
        render_at=MapCoord(
            column=tile.location.column - offset.column,
            row=tile.location.row - offset.row,
        ),
        terrain=tile.terrain,
        terrain_name=terrain_name,
        was_visited=tile.was_visited,
        was_scouted=tile.was_scouted,
        edges={
            feature: tuple(edges_by_feature[feature])
            for feature in EDGE_FEATURE_CODES
            if feature in edges_by_feature
        },
        resources=tile.resources,
        settlements=tuple(settlement.name for settlement in tile.settlements),
        specials=tuple(special.name for special in tile.specials),
        encounters=tuple(
            RenderEncounter(unit=encounter.unit, friendly=unit_in_clan(encounter.unit, owning_clan))
            for encounter in tile.encounters
        ),
    )


def build_render_map(
    tiles: dict[MapCoord, TileState],
    bounds: MapBounds,
    owning_clan: str,
    *,
    turn: str = "",
) -> RenderMap:
    hexes = tuple(build_render_hex(tiles[location], bounds.offset, owning_clan) for location in sorted(tiles))
    logger.debug("render hexes=%d", len(hexes))
    return RenderMap(turn=turn, bounds=bounds, hexes=hexes)
